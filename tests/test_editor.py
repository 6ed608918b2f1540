from __future__ import annotations

import pytest

from vim_prompt.config import EditorMode
from vim_prompt.editor import EditorClosedError, ModalEditor

ESC = "\x1b"
ENTER = "\r"
BACKSPACE = "\x7f"
CTRL_C = "\x03"


def assert_invariants(editor: ModalEditor) -> None:
    lines = editor.buffer.lines
    row, col = editor.buffer.state.cursor
    assert len(lines) >= 1
    assert 0 <= row < len(lines)
    assert 0 <= col <= len(lines[row])


def feed_keys(editor: ModalEditor, *keys: str) -> None:
    for key in keys:
        editor.feed(key)
        assert_invariants(editor)


def test_starts_in_normal_mode_with_initial_text() -> None:
    editor = ModalEditor("one\ntwo", "notes.txt")

    view = editor.view()

    assert editor.mode is EditorMode.NORMAL
    assert view.lines == ("one", "two")
    assert view.cursor == (0, 0)
    assert view.saved is True
    assert view.filename == "notes.txt"


def test_insert_typing_and_split_round_trip() -> None:
    editor = ModalEditor("abcde")

    feed_keys(editor, "l", "l", "i", ENTER)

    assert editor.buffer.lines == ("ab", "cde")
    assert "".join(editor.buffer.lines) == "abcde"
    assert editor.buffer.state.cursor == (1, 0)


def test_insert_text_then_escape_moves_left() -> None:
    editor = ModalEditor("")

    feed_keys(editor, "i", "abc", ESC)

    assert editor.buffer.lines == ("abc",)
    assert editor.buffer.state.cursor == (0, 2)
    assert editor.mode is EditorMode.NORMAL
    assert editor.buffer.state.saved is False


def test_escape_at_column_zero_stays_put() -> None:
    editor = ModalEditor("abc")

    feed_keys(editor, "i", ESC)

    assert editor.buffer.state.cursor == (0, 0)


def test_escape_in_normal_mode_is_noop() -> None:
    editor = ModalEditor("abc\ndef")
    feed_keys(editor, "j", "l")
    before = (editor.buffer.lines, editor.buffer.state.cursor, editor.mode)

    feed_keys(editor, ESC, ESC)

    assert (editor.buffer.lines, editor.buffer.state.cursor, editor.mode) == before
    assert editor.buffer.state.saved is True


def test_multibyte_insert_advances_by_unit() -> None:
    editor = ModalEditor("")

    feed_keys(editor, "i", "你好")

    assert editor.buffer.lines == ("你好",)
    assert editor.buffer.state.cursor == (0, 2)


def test_insert_backspace_joins_lines() -> None:
    editor = ModalEditor("foo\nbar")

    feed_keys(editor, "j", "i", BACKSPACE)

    assert editor.buffer.lines == ("foobar",)
    assert editor.buffer.state.cursor == (0, 3)


def test_insert_arrows_move_without_editing() -> None:
    editor = ModalEditor("ab\ncd")

    feed_keys(editor, "i", "\x1b[C", "\x1b[B", "\x1b[D", "\x1b[A")

    assert editor.mode is EditorMode.INSERT
    assert editor.buffer.state.cursor == (0, 0)
    assert editor.buffer.state.saved is True


def test_entry_keys() -> None:
    editor = ModalEditor("abc")
    feed_keys(editor, "A")
    assert editor.buffer.state.cursor == (0, 3)
    feed_keys(editor, ESC, "I")
    assert editor.buffer.state.cursor == (0, 0)
    feed_keys(editor, ESC, "a")
    assert editor.buffer.state.cursor == (0, 1)


def test_open_line_below_and_above() -> None:
    editor = ModalEditor("a\nb")

    feed_keys(editor, "o", "x", ESC)
    assert editor.buffer.lines == ("a", "x", "b")

    feed_keys(editor, "g", "O", "y", ESC)
    assert editor.buffer.lines == ("y", "a", "x", "b")
    assert editor.buffer.state.cursor == (0, 0)


def test_buffer_start_and_end_motions() -> None:
    editor = ModalEditor("one\ntwo\nthree")

    feed_keys(editor, "$", "G")
    assert editor.buffer.state.cursor == (2, 0)
    feed_keys(editor, "$", "g")
    assert editor.buffer.state.cursor == (0, 0)
    feed_keys(editor, "$")
    assert editor.buffer.state.cursor == (0, 3)
    feed_keys(editor, "0")
    assert editor.buffer.state.cursor == (0, 0)


def test_word_motion_visits_word_starts() -> None:
    editor = ModalEditor("foo  bar baz")
    columns = [editor.buffer.state.col]

    for _ in range(2):
        feed_keys(editor, "w")
        columns.append(editor.buffer.state.col)
    assert columns == [0, 5, 9]

    back = [editor.buffer.state.col]
    for _ in range(2):
        feed_keys(editor, "b")
        back.append(editor.buffer.state.col)
    assert back == [9, 5, 0]


def test_yank_and_paste_below() -> None:
    editor = ModalEditor("a\nb\nc")

    feed_keys(editor, "y", "j", "j", "p")

    assert editor.buffer.lines == ("a", "b", "c", "a")
    assert editor.buffer.state.cursor == (3, 0)


def test_yank_reports_notice_until_next_key() -> None:
    editor = ModalEditor("a")

    feed_keys(editor, "y")
    assert editor.view().notice == "1 line yanked"

    feed_keys(editor, "l")
    assert editor.view().notice == ""


def test_paste_above() -> None:
    editor = ModalEditor("a\nb")

    feed_keys(editor, "j", "y", "g", "P")

    assert editor.buffer.lines == ("b", "a", "b")
    assert editor.buffer.state.cursor == (0, 0)


def test_delete_line_keeps_one_line() -> None:
    editor = ModalEditor("only")

    feed_keys(editor, "d")

    assert editor.buffer.lines == ("",)
    assert editor.buffer.register.lines == ("only",)
    assert editor.buffer.state.saved is False


def test_delete_char_and_char_before() -> None:
    editor = ModalEditor("abcd")

    feed_keys(editor, "l", "x")
    assert editor.buffer.lines == ("acd",)
    feed_keys(editor, "X")
    assert editor.buffer.lines == ("cd",)
    assert editor.buffer.state.cursor == (0, 0)
    feed_keys(editor, "X")
    assert editor.buffer.lines == ("cd",)


def test_visual_delete_range() -> None:
    editor = ModalEditor("1\n2\n3\n4")

    feed_keys(editor, "j", "v", "j", "d")

    assert editor.buffer.lines == ("1", "4")
    assert editor.buffer.state.cursor[0] == 1
    assert editor.mode is EditorMode.NORMAL
    assert editor.buffer.register.lines == ("2", "3")


def test_visual_delete_whole_buffer_leaves_empty_line() -> None:
    editor = ModalEditor("1\n2")

    feed_keys(editor, "v", "G", "d")

    assert editor.buffer.lines == ("",)
    assert editor.buffer.state.cursor == (0, 0)


def test_visual_selection_upwards_is_normalized() -> None:
    editor = ModalEditor("1\n2\n3\n4")

    feed_keys(editor, "G", "v", "k", "k")
    assert editor.view().selection == (1, 3)

    feed_keys(editor, "y")
    assert editor.buffer.register.lines == ("2", "3", "4")
    assert editor.view().notice == "3 lines yanked"


def test_visual_escape_cancels_without_mutation() -> None:
    editor = ModalEditor("1\n2")

    feed_keys(editor, "v", "j", ESC)

    assert editor.mode is EditorMode.NORMAL
    assert editor.view().anchor is None
    assert editor.buffer.lines == ("1", "2")
    assert editor.buffer.state.saved is True


def test_undo_and_redo_keys() -> None:
    editor = ModalEditor("abc")

    feed_keys(editor, "x", "x")
    assert editor.buffer.lines == ("c",)
    feed_keys(editor, "u")
    assert editor.buffer.lines == ("bc",)
    feed_keys(editor, "\x12")
    assert editor.buffer.lines == ("c",)
    feed_keys(editor, "\x12")
    assert editor.view().notice == "Already at newest change"


def test_zz_saves_and_stops() -> None:
    editor = ModalEditor("text")

    feed_keys(editor, "i", "more ", ESC, "Z")

    assert editor.stopped is True
    assert editor.result() == "more text"


def test_ctrl_c_discards_in_every_mode() -> None:
    for prefix in ("", "i", "v", ":"):
        editor = ModalEditor("text")
        if prefix:
            editor.feed(prefix)

        editor.feed(CTRL_C)

        assert editor.stopped is True
        assert editor.result() is None


def test_keys_after_stop_in_same_chunk_are_ignored() -> None:
    editor = ModalEditor("x")

    editor.feed("Zix")

    assert editor.stopped is True
    assert editor.result() == "x"


def test_feeding_stopped_editor_raises() -> None:
    editor = ModalEditor("x")
    editor.feed(CTRL_C)

    with pytest.raises(EditorClosedError):
        editor.feed("i")
    with pytest.raises(EditorClosedError):
        editor.discard()


def test_untouched_buffer_result_is_text() -> None:
    editor = ModalEditor("a\nb")

    feed_keys(editor, ":", "q", ENTER)

    assert editor.stopped is True
    assert editor.result() == "a\nb"


@pytest.mark.parametrize("pasted", ["UP", "ENTER", "ESC", "BACKSPACE", "LEFT"])
def test_pasted_key_names_are_inserted_as_text(pasted: str) -> None:
    editor = ModalEditor("x\ny")
    editor.feed("j")
    editor.feed("i")

    editor.feed(pasted)

    assert editor.buffer.lines == ("x", f"{pasted}y")
    assert editor.mode is EditorMode.INSERT


def test_key_name_after_insert_in_same_chunk_is_text() -> None:
    editor = ModalEditor("")

    editor.feed("iUP")

    assert editor.buffer.lines == ("UP",)


def test_pasted_key_name_on_command_line_is_text() -> None:
    editor = ModalEditor("abc")

    editor.feed(":ESC")

    assert editor.mode is EditorMode.COMMAND
    assert editor.view().command_text == "ESC"
