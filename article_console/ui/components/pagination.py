"""Pager widget for listing views."""

import streamlit as st

from article_console.utils import SessionState, page_numbers, clamp_page


def render_pagination(view: str, page: int, total_pages: int, disabled: bool = False) -> None:
    """Render Previous / page numbers / Next for a listing view.

    Clicking updates the view's 'page' filter and reruns.
    """
    if total_pages <= 1:
        return

    numbers = page_numbers(total_pages)
    cols = st.columns([1] + [1] * len(numbers) + [1])

    with cols[0]:
        if st.button("‹ Prev", key=f"{view}_prev", disabled=disabled or page <= 1):
            SessionState.set_filter(view, 'page', clamp_page(page - 1, total_pages))
            st.rerun()

    for col, number in zip(cols[1:-1], numbers):
        with col:
            if st.button(
                str(number),
                key=f"{view}_page_{number}",
                type="primary" if number == page else "secondary",
                disabled=disabled or number == page,
            ):
                SessionState.set_filter(view, 'page', number)
                st.rerun()

    with cols[-1]:
        if st.button("Next ›", key=f"{view}_next", disabled=disabled or page >= total_pages):
            SessionState.set_filter(view, 'page', clamp_page(page + 1, total_pages))
            st.rerun()
