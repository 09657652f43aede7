import pytest

from tapclock.panel import (
    CHECK_BITMAP,
    MAX_PENDING,
    BigNumber,
    CheckMenu,
    Display,
    Menu,
    Panel,
    Screen,
    Terminal,
)


def test_menu_update_wraps_both_ways():
    menu = Menu(["a", "b", "c"])
    menu.update(-1)
    assert menu.current == 2
    menu.update(1)
    assert menu.current == 0
    menu.update(1)
    assert menu.current == 1


def test_menu_update_ignores_other_directions():
    menu = Menu(["a", "b", "c"])
    menu.update(0)
    menu.update(5)
    assert menu.current == 0


def test_menu_set_current_bounds():
    menu = Menu(["a", "b", "c"])
    menu.set_current(1)
    assert menu.current == 1
    menu.set_current(len(menu.items) + 1)
    assert menu.current == 0
    menu.set_current(-1)
    assert menu.current == len(menu.items) - 1


def test_empty_menu_rejected():
    with pytest.raises(ValueError):
        Menu([])


def test_menu_draw_highlights_current_and_centres():
    display = Display()
    menu = Menu(["ab", "cdef"])
    menu.update(1)
    menu.draw(display)
    boxes = [c for c in display.commands if c[0] == "box"]
    assert len(boxes) == 1
    assert boxes[0][2] == display.font_height + 1
    texts = [c for c in display.commands if c[0] == "str"]
    assert [c[3] for c in texts] == ["ab", "cdef"]
    assert [c[4] for c in texts] == [1, 0]
    for command in texts:
        assert 2 * command[1] + display.str_width(command[3]) == display.width


def test_check_menu_marks_checked_item():
    display = Display()
    menu = CheckMenu(["x", "y", "z"], checked=2)
    menu.draw(display)
    bitmaps = [c for c in display.commands if c[0] == "bitmap"]
    assert len(bitmaps) == 1
    assert bitmaps[0][3] == CHECK_BITMAP
    assert bitmaps[0][2] == 2 * display.font_height + 2


def test_check_menu_out_of_range_has_no_mark():
    display = Display()
    CheckMenu(["x", "y"], checked=7).draw(display)
    assert [c for c in display.commands if c[0] == "bitmap"] == []


def test_terminal_newline():
    term = Terminal()
    term.puts("Messages\n")
    assert term.lines == ["Messages", "", "", ""]


def test_terminal_wraps_long_line():
    term = Terminal()
    term.puts("x" * 25)
    assert term.lines[0] == "x" * 21
    assert term.lines[1] == "xxxx"


def test_terminal_scrolls():
    term = Terminal()
    term.puts("1\n2\n3\n4\n5\n")
    assert term.lines == ["3", "4", "5", ""]


def test_terminal_carriage_return_clears_row():
    term = Terminal()
    term.puts("abc\rxy")
    assert term.lines[0] == "xy"


def test_terminal_printf_returns_length():
    term = Terminal()
    assert term.printf("%02x ", 0xF8) == 3
    assert term.lines[0] == "f8 "


def test_terminal_clear():
    term = Terminal()
    term.puts("hello\nworld")
    term.clear()
    assert term.lines == ["", "", "", ""]
    term.puts("again")
    assert term.lines[0] == "again"


def test_terminal_draw_draws_each_line():
    display = Display()
    term = Terminal()
    term.puts("one\ntwo")
    term.draw(display)
    assert display.strings == ["one", "two", "", ""]


def test_big_number_draw():
    display = Display()
    BigNumber("bpm", 123).draw(display)
    assert display.strings == ["bpm", "123"]


def test_big_number_without_title():
    display = Display()
    BigNumber("", 7).draw(display)
    assert display.strings == ["7"]


def test_screen_idle_without_reload():
    display = Display(pages=1)
    screen = Screen(display)
    screen.refresh(BigNumber("t", 1))
    assert display.frames == 0
    assert display.commands == []


def test_screen_completes_frame_in_steps():
    display = Display(pages=2)
    screen = Screen(display)
    screen.reload()
    panel = BigNumber("title", 5)
    for _ in range(4):
        screen.refresh(panel)
    assert screen.pending == 1
    screen.refresh(panel)
    assert screen.pending == 0
    assert display.frames == 1
    assert display.strings == ["title", "5"]


def test_screen_reload_is_capped():
    screen = Screen(Display())
    for _ in range(MAX_PENDING + 50):
        screen.reload()
    assert screen.pending == MAX_PENDING


def test_display_needs_a_page():
    with pytest.raises(ValueError):
        Display(pages=0)


def test_base_panel_draws_nothing():
    display = Display()
    display.set_background()
    Panel().draw(display)
    assert display.commands == []
    assert display.color == 1