"""Tests for the accela buffer."""

import random
from pathlib import Path

import pytest

from accela.buffer import Buffer
from accela.exceptions import FileOperationError
from accela.models import Selection


def make_buffer(*lines: str) -> Buffer:
    return Buffer(list(lines) or None)


class TestInsertion:
    """Tests for typing into a buffer."""

    def test_insert_text_moves_cursor(self):
        """Inserted characters advance the cursor by their count."""
        buffer = make_buffer()
        buffer.insert_text("hi\tthere")

        assert buffer.lines[0] == "hi\tthere"
        assert buffer.cursor == (0, 8)
        assert buffer.modified

    def test_insert_in_middle(self):
        """Text is inserted at the cursor column."""
        buffer = make_buffer("helo")
        buffer.set_cursor(0, 3)
        buffer.insert_char("l")

        assert buffer.lines[0] == "hello"
        assert buffer.cursor == (0, 4)

    def test_insert_newline_splits_line(self):
        """Enter splits the line and moves to the start of the new one."""
        buffer = make_buffer("abcdef")
        buffer.set_cursor(0, 2)
        buffer.insert_newline()

        assert list(buffer.lines) == ["ab", "cdef"]
        assert buffer.cursor == (1, 0)

    def test_insert_multiline_text(self):
        """Multi-line text is spliced in and the cursor ends after it."""
        buffer = make_buffer("[]")
        buffer.set_cursor(0, 1)
        buffer.insert_text("one\ntwo\nthree")

        assert list(buffer.lines) == ["[one", "two", "three]"]
        assert buffer.cursor == (2, 5)

    def test_insert_normalizes_carriage_returns(self):
        """Pasted CRLF text does not leave carriage returns behind."""
        buffer = make_buffer()
        buffer.insert_text("a\r\nb")

        assert list(buffer.lines) == ["a", "b"]

    def test_edits_bump_version(self):
        """Every edit changes the version used to detect stale searches."""
        buffer = make_buffer("x")
        version = buffer.version
        buffer.insert_char("y")
        assert buffer.version > version


class TestDeletion:
    """Tests for backspace, delete and range deletion."""

    def test_backspace_removes_previous_char(self):
        """Backspace deletes before the cursor."""
        buffer = make_buffer("abc")
        buffer.set_cursor(0, 2)

        assert buffer.delete_backward()
        assert buffer.lines[0] == "ac"
        assert buffer.cursor == (0, 1)

    def test_backspace_joins_lines(self):
        """Backspace at column 0 joins with the previous line."""
        buffer = make_buffer("hi", "there")
        buffer.set_cursor(1, 0)

        assert buffer.delete_backward()
        assert list(buffer.lines) == ["hithere"]
        assert buffer.cursor == (0, 2)

    def test_backspace_at_document_start(self):
        """Backspace at (0, 0) does nothing."""
        buffer = make_buffer("abc")

        assert not buffer.delete_backward()
        assert buffer.lines[0] == "abc"
        assert not buffer.modified

    def test_delete_forward_joins_next_line(self):
        """Delete at the end of a line pulls up the next line."""
        buffer = make_buffer("ab", "cd")
        buffer.set_cursor(0, 2)

        assert buffer.delete_forward()
        assert list(buffer.lines) == ["abcd"]
        assert buffer.cursor == (0, 2)

    def test_delete_forward_at_document_end(self):
        """Delete at the very end does nothing."""
        buffer = make_buffer("ab")
        buffer.set_cursor(0, 2)

        assert not buffer.delete_forward()

    def test_delete_range_multi_line(self):
        """A multi-line range collapses into one line."""
        buffer = make_buffer("alpha", "beta", "gamma")
        selection = Selection(2, 2, 0, 3, active=True)

        buffer.delete_range(selection)

        assert list(buffer.lines) == ["alpmma"]
        assert buffer.cursor == (0, 3)
        assert not selection.active

    def test_delete_range_clamps_out_of_range_ends(self):
        """Range endpoints beyond the document are clamped first."""
        buffer = make_buffer("abc", "def")
        buffer.delete_range(Selection(0, 1, 9, 99, active=True))

        assert list(buffer.lines) == ["a"]

    def test_extract_text(self):
        """Extracted text joins the covered lines with newlines."""
        buffer = make_buffer("alpha", "beta", "gamma")

        text = buffer.extract_text(Selection(0, 3, 2, 2, active=True))

        assert text == "ha\nbeta\nga"

    def test_delete_selection_without_selection(self):
        """delete_selection is a no-op when nothing is selected."""
        buffer = make_buffer("abc")

        assert not buffer.delete_selection()
        assert buffer.lines[0] == "abc"


class TestMotion:
    """Tests for cursor motions and selection extension."""

    def test_left_wraps_to_previous_line(self):
        """Left at column 0 goes to the end of the previous line."""
        buffer = make_buffer("abc", "de")
        buffer.set_cursor(1, 0)
        buffer.move_left()

        assert buffer.cursor == (0, 3)

    def test_right_wraps_to_next_line(self):
        """Right at the end of a line goes to the start of the next."""
        buffer = make_buffer("abc", "de")
        buffer.set_cursor(0, 3)
        buffer.move_right()

        assert buffer.cursor == (1, 0)

    def test_vertical_motion_clamps_column(self):
        """Moving onto a shorter line clamps the column."""
        buffer = make_buffer("long line", "ab")
        buffer.set_cursor(0, 8)
        buffer.move_down()

        assert buffer.cursor == (1, 2)

    def test_vertical_motion_stops_at_edges(self):
        """Up on the first line and down on the last line stay put."""
        buffer = make_buffer("a", "b")
        buffer.move_up()
        assert buffer.cursor == (0, 0)

        buffer.set_cursor(1, 0)
        buffer.move_down()
        assert buffer.cursor == (1, 0)

    def test_page_motion(self):
        """Page down moves by the given number of rows, clamped."""
        buffer = make_buffer(*[str(n) for n in range(30)])
        buffer.move_page_down(10)
        assert buffer.cursor_line == 10

        buffer.move_page_down(100)
        assert buffer.cursor_line == 29

        buffer.move_page_up(5)
        assert buffer.cursor_line == 24

    def test_home_and_end(self):
        """Home and End go to the line edges."""
        buffer = make_buffer("hello")
        buffer.move_line_end()
        assert buffer.cursor == (0, 5)

        buffer.move_line_start()
        assert buffer.cursor == (0, 0)

    def test_word_right(self):
        """Word right skips separators, then the following word."""
        buffer = make_buffer("foo  bar.baz")
        buffer.move_word_right()
        assert buffer.cursor_col == 3

        buffer.move_word_right()
        assert buffer.cursor_col == 8

        buffer.move_word_right()
        assert buffer.cursor_col == 12

    def test_word_left(self):
        """Word left skips separators, then the preceding word."""
        buffer = make_buffer("foo  bar")
        buffer.move_line_end()
        buffer.move_word_left()
        assert buffer.cursor_col == 5

        buffer.move_word_left()
        assert buffer.cursor_col == 0

    def test_word_motion_crosses_lines(self):
        """Word motions at a line edge step onto the adjacent line."""
        buffer = make_buffer("ab", "cd")
        buffer.set_cursor(0, 2)
        buffer.move_word_right()
        assert buffer.cursor == (1, 0)

        buffer.move_word_left()
        assert buffer.cursor == (0, 2)

    def test_select_with_motion(self):
        """Motions with select extend a selection from the starting point."""
        buffer = make_buffer("foo bar")
        for _ in range(3):
            buffer.apply_motion(buffer.move_right, select=True)

        assert buffer.selection.active
        assert buffer.selected_text() == "foo"

    def test_plain_motion_clears_selection(self):
        """A motion without select drops the selection."""
        buffer = make_buffer("foo bar")
        buffer.apply_motion(buffer.move_right, select=True)
        buffer.apply_motion(buffer.move_right)

        assert not buffer.selection.active
        assert buffer.selected_text() == ""

    def test_set_cursor_clamps(self):
        """Out-of-range cursor positions are clamped into the document."""
        buffer = make_buffer("abc")
        buffer.set_cursor(10, 10)
        assert buffer.cursor == (0, 3)

        buffer.set_cursor(-1, -1)
        assert buffer.cursor == (0, 0)


class TestFiles:
    """Tests for loading and saving."""

    def test_load_strips_carriage_returns(self, tmp_path):
        """CRLF files load as plain lines."""
        path = tmp_path / "dos.txt"
        path.write_bytes(b"one\r\ntwo\r\n")

        buffer = make_buffer()
        assert buffer.load(path)

        assert list(buffer.lines) == ["one", "two", ""]
        assert buffer.path == path
        assert not buffer.modified

    def test_load_missing_file_starts_new_buffer(self, tmp_path):
        """A missing file binds the name with empty content."""
        path = tmp_path / "new.txt"
        buffer = make_buffer("old content")

        assert buffer.load(path) is False
        assert list(buffer.lines) == [""]
        assert buffer.path == path

    def test_load_binary_file_fails(self, tmp_path):
        """Undecodable files raise and leave the buffer untouched."""
        path = tmp_path / "blob.bin"
        path.write_bytes(b"\xff\xfe\x00")
        buffer = make_buffer("keep")

        with pytest.raises(FileOperationError):
            buffer.load(path)
        assert list(buffer.lines) == ["keep"]
        assert buffer.path is None

    def test_save_round_trip(self, tmp_path):
        """Saved files contain lines joined by newlines, no trailing newline."""
        path = tmp_path / "out.txt"
        buffer = make_buffer("a", "b")
        buffer.insert_char("x")

        assert buffer.save(path) == path
        assert path.read_bytes() == b"xa\nb"
        assert buffer.path == path
        assert not buffer.modified

    def test_save_without_name(self):
        """Saving an unnamed buffer without a path fails."""
        with pytest.raises(FileOperationError):
            make_buffer("a").save()

    def test_failed_save_keeps_path(self, tmp_path):
        """A failed save does not rebind the buffer."""
        buffer = make_buffer("a")
        target = tmp_path / "missing-dir" / "out.txt"

        with pytest.raises(FileOperationError):
            buffer.save(target)
        assert buffer.path is None

    def test_unknown_extension_uses_plain_text(self, tmp_path):
        """Files without a known lexer still load and highlight."""
        path = tmp_path / "notes.zzzunknown"
        path.write_text("hello")
        buffer = Buffer(path=path)
        buffer.load(path)

        assert buffer.refresh_highlight()
        assert buffer.lines[0] == "hello"

    def test_display_name(self):
        """Unnamed buffers show a placeholder."""
        assert make_buffer().display_name == "[No Name]"
        assert Buffer(path=Path("a.py")).display_name == "a.py"


ALPHABET = "ab _\t\n"


def random_text(rng: random.Random, max_length: int = 12) -> str:
    return "".join(rng.choice(ALPHABET) for _ in range(rng.randint(0, max_length)))


def random_position(rng: random.Random, buffer: Buffer):
    line = rng.randrange(buffer.line_count)
    return line, rng.randint(0, buffer.lines.line_length(line))


def assert_cursor_in_bounds(buffer: Buffer):
    assert 0 <= buffer.cursor_line < buffer.line_count
    assert 0 <= buffer.cursor_col <= len(buffer.current_line)


class TestProperties:
    """Seeded randomized checks of editing invariants."""

    def test_insert_then_backspace_restores_lines(self):
        """Backspacing over inserted text gives back the original lines."""
        rng = random.Random(1)
        for _ in range(200):
            buffer = Buffer.from_text(random_text(rng, 30))
            original = list(buffer.lines)
            buffer.set_cursor(*random_position(rng, buffer))
            text = random_text(rng)

            buffer.insert_text(text)
            for _ in range(len(text)):
                assert buffer.delete_backward()

            assert list(buffer.lines) == original

    def test_extract_delete_insert_restores_document(self):
        """Cutting a range and pasting it back at its start is a no-op."""
        rng = random.Random(2)
        for _ in range(200):
            buffer = Buffer.from_text(random_text(rng, 30))
            original = list(buffer.lines)
            start = random_position(rng, buffer)
            end = random_position(rng, buffer)
            selection = Selection(*start, *end, active=True)
            lo_line, lo_col, _, _ = selection.normalized()

            extracted = buffer.extract_text(selection)
            buffer.delete_range(selection)
            assert buffer.cursor == (lo_line, lo_col)
            buffer.insert_text(extracted)

            assert list(buffer.lines) == original

    def test_cursor_stays_in_bounds(self):
        """No edit or motion leaves the cursor outside the document."""
        rng = random.Random(3)
        buffer = Buffer.from_text("ab\tc\n\n_ a")
        actions = [
            lambda: buffer.insert_text(random_text(rng, 5)),
            buffer.insert_newline,
            buffer.delete_backward,
            buffer.delete_forward,
            lambda: buffer.delete_range(
                Selection(*random_position(rng, buffer), *random_position(rng, buffer), active=True)
            ),
            buffer.move_left,
            buffer.move_right,
            buffer.move_up,
            buffer.move_down,
            buffer.move_word_left,
            buffer.move_word_right,
            buffer.move_line_start,
            buffer.move_line_end,
            lambda: buffer.move_page_up(3),
            lambda: buffer.move_page_down(3),
        ]
        for _ in range(2000):
            rng.choice(actions)()
            assert_cursor_in_bounds(buffer)
