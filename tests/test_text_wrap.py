from app_ui.ui_helpers.text_wrap import DEFAULT_DIALOG_COLUMN_COUNT, wrap_text


def test_wrap_text_respects_columns_and_keeps_paths() -> None:
    path = "/opt/R/4.3.1/lib/R/" + "x" * 80
    text = "Failed to detect an R installation at the R Home selected " + path
    lines = wrap_text(text).splitlines()
    assert lines[-1] == path
    assert all(len(line) <= DEFAULT_DIALOG_COLUMN_COUNT for line in lines[:-1])


def test_wrap_text_keeps_paragraphs() -> None:
    assert wrap_text("one\n\ntwo", 10) == "one\n\ntwo"
