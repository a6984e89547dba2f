"""Streamlit UI for AI-powered web search.

Run with: streamlit run src/perplexity_search/web/streamlit_app.py
"""

from html import escape

import streamlit as st

from perplexity_search.types.search import SearchResponse, SearchResult
from perplexity_search.ui.client import ProxyClient
from perplexity_search.ui.controller import Phase, SearchController, Tab
from perplexity_search.ui.render import tab_label, top_results, visible_snippets

QUERY_KEY = "query-input"
TAB_KEY = "active-tab"

EXAMPLE_QUESTIONS = (
    "What are the most visited places in Japan?",
    "How does a quantum computer work?",
)

# Custom CSS for result cards and the image grid
CUSTOM_CSS = """
<style>
    .result-card {
        border: 1px solid #374151;
        border-radius: 8px;
        padding: 1rem;
        margin: 0.5rem 0;
    }

    .result-site {
        color: #9ca3af;
        font-size: 0.85rem;
    }

    .image-tile img {
        width: 100%;
        height: 10rem;
        object-fit: cover;
        border-radius: 8px;
    }
</style>
"""


def get_controller() -> SearchController:
    """Return the per-session controller, creating it on first use."""
    if "controller" not in st.session_state:
        st.session_state.controller = SearchController()
    return st.session_state.controller


def render_result_card(item: SearchResult, with_snippets: bool = False) -> None:
    """Render one source with favicon, title link, site name and description."""
    favicon = ""
    if item.favicon:
        favicon = (
            f'<img src="{escape(item.favicon)}" alt="{escape(item.site_name)} favicon" '
            'width="16" height="16"/> '
        )

    # Descriptions come from the provider with inline markup
    st.markdown(
        f"""
    <div class="result-card">
        {favicon}<a href="{escape(item.url)}" target="_blank" rel="noopener noreferrer"><strong>{escape(item.title)}</strong></a>
        <div class="result-site">{escape(item.site_long_name)}</div>
        <div>{item.description}</div>
    </div>
    """,
        unsafe_allow_html=True,
    )

    if with_snippets:
        snippets = visible_snippets(item)
        if snippets:
            st.caption("Excerpts from this source:")
            for snippet in snippets:
                st.markdown(f"> “{snippet}”")
        if item.thumbnail:
            st.image(item.thumbnail, width=64)


def render_search_tab(response: SearchResponse) -> None:
    st.subheader("AI Overview")
    st.write(response.ai_overview)

    st.subheader("Top Results")
    for item in top_results(response):
        render_result_card(item)


def render_images_tab(response: SearchResponse) -> None:
    st.subheader(f'Images related to "{response.query}"')
    columns = st.columns(4)
    for index, url in enumerate(response.image_urls):
        with columns[index % 4]:
            st.markdown(
                f'<div class="image-tile"><a href="{escape(url)}" target="_blank" '
                f'rel="noopener noreferrer"><img src="{escape(url)}" '
                f'alt="Search result image {index + 1}"/></a></div>',
                unsafe_allow_html=True,
            )


def render_sources_tab(response: SearchResponse) -> None:
    st.subheader(f'Sources for "{response.query}"')
    for item in response.results:
        render_result_card(item, with_snippets=True)


TAB_RENDERERS = {
    Tab.SEARCH: render_search_tab,
    Tab.IMAGES: render_images_tab,
    Tab.SOURCES: render_sources_tab,
}


def submit_query(controller: SearchController) -> None:
    """Form callback: submit whatever is in the query box."""
    controller.set_query(st.session_state.get(QUERY_KEY, ""))
    controller.submit()


def start_new_search(controller: SearchController) -> None:
    """Button callback: back to the empty form.

    Callbacks run before the next script pass, so the reset also wins over a
    request that settled while the click was queued.
    """
    controller.new_search()
    st.session_state.pop(QUERY_KEY, None)


def select_tab(controller: SearchController) -> None:
    controller.select_tab(st.session_state[TAB_KEY])


def render_pre_search(controller: SearchController) -> None:
    """Render the query form."""
    st.title("Perplexity Search")
    st.write("Ask any question and get AI-powered search results using JigsawStack")

    with st.form("search-form"):
        st.text_input(
            "Query",
            key=QUERY_KEY,
            placeholder="Ask a question...",
            label_visibility="collapsed",
        )
        st.form_submit_button("Search", on_click=submit_query, args=(controller,))

    st.caption("Example questions: " + ", ".join(f'"{q}"' for q in EXAMPLE_QUESTIONS))


def render_searching(controller: SearchController, client: ProxyClient) -> None:
    """Render the busy state and run the pending request."""
    st.header(f'Searching: "{controller.state.query}"')

    st.button(
        "← New Search",
        key="new-search-searching",
        on_click=start_new_search,
        args=(controller,),
    )

    ticket = controller.pending_ticket()
    if ticket is None:
        return

    with st.spinner("Searching with JigsawStack... This may take up to 30 seconds."):
        controller.run(ticket, client.search)
    st.rerun()


def render_results(controller: SearchController, client: ProxyClient) -> None:
    """Render the results header, error banner and tabs."""
    state = controller.state

    header, action = st.columns([4, 1])
    with header:
        st.header(f'"{state.response.query}"' if state.response else "Search Results")
        st.caption(
            "Search results powered by JigsawStack" if state.response else "Loading search results..."
        )
    with action:
        st.button(
            "New Search",
            key="new-search-results",
            on_click=start_new_search,
            args=(controller,),
        )

    if state.error is not None:
        st.error(f"**Error:** {state.error}")
        st.button(
            "Retrying..." if state.loading else "Retry Request",
            key="retry",
            disabled=state.loading,
            on_click=controller.retry,
        )
        if state.retry_count:
            st.caption(f"Retry attempts: {state.retry_count}")

        ticket = controller.pending_ticket()
        if ticket is not None:
            with st.spinner("Retrying..."):
                controller.run(ticket, client.search)
            st.rerun()
        return

    response = state.response
    if response is None or state.loading:
        return

    tabs = list(Tab)
    st.radio(
        "Tab",
        tabs,
        key=TAB_KEY,
        index=tabs.index(state.active_tab),
        format_func=lambda tab: tab_label(tab, response),
        horizontal=True,
        label_visibility="collapsed",
        on_change=select_tab,
        args=(controller,),
    )

    TAB_RENDERERS[controller.state.active_tab](response)


def main() -> None:
    st.set_page_config(page_title="Perplexity Search", page_icon="🔍", layout="wide")
    st.markdown(CUSTOM_CSS, unsafe_allow_html=True)

    controller = get_controller()
    client = ProxyClient()

    phase = controller.state.phase
    if phase is Phase.PRE_SEARCH:
        render_pre_search(controller)
    elif phase is Phase.SEARCHING:
        render_searching(controller, client)
    else:
        render_results(controller, client)

    st.divider()
    st.caption("Powered by JigsawStack Web Search API")


if __name__ == "__main__":
    main()
