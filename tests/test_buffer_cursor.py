import pytest

from gap_engine.buffer import Buffer, Coordinates, InvalidArgumentError

THREE_LINES = "123456789\n" * 3
FIVE_LINES = "123456789\n" * 5


def make_buffer(text: str = "", *, capacity: int = 100) -> Buffer:
    buffer = Buffer(capacity=capacity)
    buffer.insert(text)
    return buffer


def test_insert_then_move_back() -> None:
    buffer = make_buffer("abcdef\nghijk")
    assert buffer.debug_string() == "{abcdef\nghijk}GAP{}"

    buffer.move_by(-3)

    assert buffer.pre_text() == "abcdef\ngh"
    assert buffer.post_text() == "ijk"
    assert buffer.coordinates() == Coordinates(2, 2)


def test_insert_tracks_line_and_column() -> None:
    buffer = make_buffer("ab\nc")

    assert (buffer.line, buffer.column) == (2, 1)
    assert buffer.position == 4


def test_move_to_updates_line_and_column() -> None:
    buffer = make_buffer(THREE_LINES)

    buffer.move_to(12)

    assert buffer.position == 12
    assert buffer.line == 2
    assert buffer.column == 2
    assert buffer.debug_string() == "{123456789\n12}GAP{3456789\n123456789\n}"

    buffer.move_to(16)

    assert buffer.debug_string() == "{123456789\n123456}GAP{789\n123456789\n}"
    assert buffer.column == 6


def test_column_positions() -> None:
    buffer = make_buffer(THREE_LINES)

    buffer.move_to(12)
    assert buffer.column == 2
    buffer.move_to(0)
    assert buffer.column == 0
    buffer.move_to(14)
    assert buffer.column == 4


def test_line_positions() -> None:
    buffer = make_buffer(FIVE_LINES)

    buffer.move_to(12)
    assert buffer.line == 2
    buffer.move_to(28)
    assert buffer.line == 3
    buffer.move_to(2)
    assert buffer.line == 1


def test_stepping_back_over_terminator_recomputes_column() -> None:
    buffer = make_buffer(THREE_LINES)
    buffer.move_to(20)
    assert buffer.coordinates() == Coordinates(3, 0)

    buffer.move_by(-1)

    assert buffer.position == 19
    assert buffer.coordinates() == Coordinates(2, 9)


def test_stepping_back_onto_first_line() -> None:
    buffer = make_buffer("abc\nd")
    buffer.move_to(4)

    buffer.move_by(-1)

    assert buffer.coordinates() == Coordinates(1, 3)


def test_move_by_clamps_to_buffer_ends() -> None:
    buffer = make_buffer(THREE_LINES)

    buffer.move_by(100)
    assert buffer.position == 30
    assert buffer.coordinates() == Coordinates(4, 0)

    buffer.move_by(-100)
    assert buffer.position == 0
    assert buffer.coordinates() == Coordinates(1, 0)


def test_move_to_is_idempotent() -> None:
    buffer = make_buffer(THREE_LINES)

    buffer.move_to(17)
    first = (buffer.debug_string(), buffer.coordinates())
    buffer.move_to(17)

    assert (buffer.debug_string(), buffer.coordinates()) == first


def test_step_forward_and_backward_report_ends() -> None:
    buffer = make_buffer("ab")

    assert buffer.step_forward() is False
    assert buffer.step_backward() is True
    assert buffer.position == 1
    buffer.move_to(0)
    assert buffer.step_backward() is False


def test_move_to_line() -> None:
    buffer = make_buffer(THREE_LINES)

    buffer.move_to_line(3)

    assert buffer.position == 20
    assert buffer.coordinates() == Coordinates(3, 0)


def test_move_to_line_past_end_lands_at_end() -> None:
    buffer = make_buffer(THREE_LINES)

    buffer.move_to_line(10)

    assert buffer.position == 30


def test_move_by_line() -> None:
    buffer = make_buffer(THREE_LINES)
    buffer.move_to(12)

    buffer.move_by_line(1)
    assert buffer.position == 20

    buffer.move_by_line(-2)
    assert buffer.position == 0


def test_move_to_column_stays_on_line() -> None:
    buffer = make_buffer(THREE_LINES)
    buffer.move_to_line(2)

    buffer.move_to_column(4)
    assert buffer.position == 14

    buffer.move_to_column(50)
    assert buffer.position == 19
    assert buffer.coordinates() == Coordinates(2, 9)

    buffer.move_to_column(1)
    assert buffer.position == 11


def test_get_line_and_column_of_restores_cursor() -> None:
    buffer = make_buffer(FIVE_LINES)
    buffer.move_to(5)

    coordinates = buffer.get_line_and_column_of(27)

    assert coordinates == Coordinates(3, 7)
    assert buffer.position == 5
    assert buffer.coordinates() == Coordinates(1, 5)


def test_get_position_of_line() -> None:
    buffer = make_buffer(FIVE_LINES)

    assert buffer.get_position_of_line(1) == 0
    assert buffer.get_position_of_line(3) == 20
    assert buffer.get_position_of_line(6) == 50
    assert buffer.get_position_of_line(7) is None


def test_get_position_of_line_on_empty_buffer() -> None:
    buffer = make_buffer()

    assert buffer.get_position_of_line(1) == 0
    assert buffer.get_position_of_line(2) is None


def test_get_position_of_line_and_column() -> None:
    buffer = make_buffer(THREE_LINES)

    assert buffer.get_position_of_line_and_column(2, 3) == 13
    assert buffer.get_position_of_line_and_column(2, 9) == 19
    assert buffer.get_position_of_line_and_column(2, 10) is None
    assert buffer.get_position_of_line_and_column(9, 0) is None


def test_char_at() -> None:
    buffer = make_buffer(THREE_LINES)
    buffer.move_to(12)

    assert buffer.char_at(0) == "1"
    assert buffer.char_at(9) == "\n"
    assert buffer.char_at(11) == "2"
    assert buffer.char_at(12) == "3"
    assert buffer.char_at(29) == "\n"
    assert buffer.char_at(30) == ""


@pytest.mark.parametrize("index", [-1, 31])
def test_char_at_rejects_out_of_range(index: int) -> None:
    buffer = make_buffer(THREE_LINES)

    with pytest.raises(InvalidArgumentError):
        buffer.char_at(index)


def test_from_text_starts_clean_at_origin() -> None:
    buffer = Buffer.from_text("ab\ncd")

    assert buffer.position == 0
    assert buffer.text() == "ab\ncd"
    assert buffer.modified is False
    assert len(buffer.history) == 0


def test_get_position_of_line_scans_across_cursor() -> None:
    buffer = make_buffer(FIVE_LINES)
    buffer.move_to(25)

    assert buffer.get_position_of_line(2) == 10
    assert buffer.get_position_of_line(4) == 30
    assert buffer.position == 25
