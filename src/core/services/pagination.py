"""Section page-break policy for the PDF layout."""

SECTION_BREAK_THRESHOLD_MM = 40.0


def needs_page_break(
    current_y: float,
    page_height: float,
    next_section_height: float = 0.0,
    threshold: float = SECTION_BREAK_THRESHOLD_MM,
) -> bool:
    """
    True when a section starting at ``current_y`` should move to a new page.

    A section needs ``next_section_height`` (its heading plus a few rows)
    above the bottom reserve of ``threshold`` millimetres.
    """
    return current_y + next_section_height > page_height - threshold
