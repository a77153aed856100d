"""
Bootstrap environment for Streamlit Cloud & local dev:
- Copy dashboard settings from st.secrets into DASHBOARD_* env vars.
  Both `[dashboard] page_size = 25` and a top-level `page_size = 25`
  become DASHBOARD_PAGE_SIZE
- Finally, load .env (without overriding existing env vars)
"""

from __future__ import annotations

import os
import re
from typing import Any, Dict, Iterator, Tuple

import streamlit as st
from dotenv import load_dotenv
from streamlit.errors import StreamlitAPIException

from insights_dashboard.config import ENV_PREFIX

SECRETS_SECTION = "dashboard"


def _env_key(*parts: str) -> str:
    name = re.sub(r"[^A-Za-z0-9]+", "_", "_".join(parts)).strip("_").upper()
    return name if name.startswith(ENV_PREFIX) else f"{ENV_PREFIX}{name}"


def _setting_pairs(secrets: Dict[str, Any]) -> Iterator[Tuple[str, str]]:
    for key, value in secrets.items():
        if key.lower() == SECRETS_SECTION and isinstance(value, dict):
            for name, setting in value.items():
                if not isinstance(setting, dict):
                    yield _env_key(name), str(setting)
        elif not isinstance(value, dict):
            yield _env_key(key), str(value)


def _read_secrets() -> Dict[str, Any]:
    try:
        # st.secrets raises when no secrets.toml exists
        return st.secrets.to_dict()
    except (FileNotFoundError, StreamlitAPIException):
        return {}


def ensure_env() -> None:
    """Idempotent: make sure DASHBOARD_* env vars are available.
    Safe to call multiple times, both inside and outside Streamlit runtime.
    Values already in the environment win over secrets and .env.
    """
    for key, value in _setting_pairs(_read_secrets()):
        os.environ.setdefault(key, value)
    load_dotenv()
