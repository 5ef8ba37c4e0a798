from core.desktop.devtools.interface.tui_modes import Confirmation, Picker, TextPrompt


def test_picker_filters_case_insensitively_and_keeps_item_order():
    applied = []
    picker = Picker(title="t", items=["Garden", "work", "garage"], on_apply=applied.append)
    picker.type("GAR")
    assert picker.visible == ["Garden", "garage"]
    picker.move(5)
    assert picker.current() == "garage"
    picker.toggle_current()
    picker.backspace()
    picker.backspace()
    picker.backspace()
    assert picker.cursor == 0
    picker.toggle_current()
    picker.apply()
    assert applied == [["Garden", "garage"]]


def test_picker_toggle_on_empty_view_is_noop():
    picker = Picker(title="t", items=["a"], on_apply=lambda chosen: None, query="zz")
    picker.toggle_current()
    assert picker.selected == set()
    assert picker.current() == ""


def test_text_prompt_submits_stripped_text():
    got = []
    prompt = TextPrompt(label="New task: ", on_submit=got.append, text="  ")
    for ch in "Buy milk ":
        prompt.type(ch)
    prompt.submit()
    assert got == ["Buy milk"]


def test_confirmation_runs_callback():
    hits = []
    Confirmation(message="Delete?", on_confirm=lambda: hits.append(1)).confirm()
    assert hits == [1]
