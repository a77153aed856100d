from insights_dashboard.bootstrap_env import ensure_env

ensure_env()  # must run before settings are read

import atexit
import logging

import streamlit as st
from streamlit.runtime import get_instance
from streamlit.runtime.scriptrunner import get_script_run_ctx

from insights_dashboard.config import SECTIONS, Settings, load_settings
from insights_dashboard.logging_config import setup_logging
from insights_dashboard.ui.layout import live_update_cadence, render_header, setup_page, sidebar_controls
from insights_dashboard.ui.pages import campaigns, overview
from insights_dashboard.ui.pages.context import PageContext
from insights_dashboard.ui.session_registry import RunnerRegistry
from insights_dashboard.ui.session_runner import SessionRunner

logger = logging.getLogger("insights_dashboard.app")


def _session_active(session_id: str) -> bool:
    return get_instance().is_active_session(session_id)


@st.cache_resource(show_spinner=False)
def _registry(reap_interval: float) -> RunnerRegistry:
    registry = RunnerRegistry()
    registry.start_reaper(_session_active, interval=reap_interval)
    atexit.register(registry.close_all)
    return registry


def _get_runner(settings: Settings) -> SessionRunner:
    registry = _registry(settings.live_update_interval)
    registry.reap(_session_active)
    return registry.get(get_script_run_ctx().session_id, settings)


def _render_sections(context: PageContext, run_every: float) -> None:
    session = context.runner.session
    if run_every != live_update_cadence(session.loading, context.settings.live_update_interval):
        # Loading finished (or a refresh started): restart with the matching cadence
        st.rerun()

    params = campaigns.current_params(context.settings.page_size)
    view = session.view(params, context.date_range)

    render_header(session.loading, view.store_version)
    for section in SECTIONS:
        if section.key == "overview":
            overview.render(view, context)
        elif section.key == "campaigns":
            campaigns.render(view, context, params)


def main() -> None:
    settings = load_settings(load_env_file=False)
    setup_logging(settings.log_level, settings.log_dir)
    setup_page()

    runner = _get_runner(settings)
    controls = sidebar_controls(refreshing=runner.session.refresher.refreshing)
    if controls.refresh_requested:
        runner.request_refresh()
        st.toast("Refreshing campaign data…", icon="🔄")

    context = PageContext(
        runner=runner,
        settings=settings,
        date_range=controls.date_range,
        theme=controls.theme,
    )

    # Re-render on the live-update cadence so ticks and refreshes show up without interaction
    run_every = live_update_cadence(runner.session.loading, settings.live_update_interval)
    live_sections = st.fragment(run_every=run_every)(_render_sections)
    live_sections(context, run_every)


if __name__ == "__main__":
    main()
