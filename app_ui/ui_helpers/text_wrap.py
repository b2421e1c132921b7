"""Line wrapping for text shown in message dialogs."""

import textwrap

DEFAULT_DIALOG_COLUMN_COUNT = 60


def wrap_text(text: str, column_count: int = DEFAULT_DIALOG_COLUMN_COUNT) -> str:
    """Wrap each paragraph of ``text`` to ``column_count`` columns, keeping long paths intact."""
    paragraphs = str(text).split("\n")
    wrapped = [
        textwrap.fill(
            paragraph,
            width=max(1, int(column_count)),
            break_long_words=False,
            break_on_hyphens=False,
        )
        if paragraph.strip()
        else ""
        for paragraph in paragraphs
    ]
    return "\n".join(wrapped)
