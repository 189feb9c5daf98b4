from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


#
# Shared theme tokens
# - Centralized here so components/styles.py and the Plotly theme agree.
#
THEME = {
    # Backgrounds
    "bg_primary": "#F5F7F6",     # page background
    "bg_secondary": "#FFFFFF",   # sidebar / top surfaces
    "bg_card": "#FFFFFF",       # card surface
    # Accents (cooperative green + slate)
    "accent_primary": "#0F766E",
    "accent_secondary": "#14B8A6",
    "navy_900": "#0F172A",
    "navy_800": "#1E293B",
    # Text + borders
    "text_primary": "#111827",
    "text_secondary": "rgba(17, 24, 39, 0.72)",
    "border_color": "#E2E8F0",
    "grid": "rgba(17, 24, 39, 0.10)",
    "shadow": "0 1px 3px rgba(16,24,40,0.08)",
    "radius_px": 10,
    # Status colors
    "success": "#067647",
    "warning": "#F59E0B",
    "danger": "#B42318",
    "muted": "#6B7280",
}


@dataclass(frozen=True)
class AppConfig:
    # Required for "real data" mode (hosted Postgres via its REST + auth APIs)
    supabase_url: str
    supabase_key: Optional[str]

    request_timeout_s: float

    # Defaults
    default_use_mock: bool
    currency_label: str
    log_level: str

    @property
    def project_ref(self) -> str:
        # https://<ref>.supabase.co -> <ref>
        host = self.supabase_url.replace("https://", "").replace("http://", "")
        return host.split(".")[0] if host else ""


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def get_config() -> AppConfig:
    """
    Centralized config: this is the ONLY place env vars are read.
    - Loads `.env` if present (local dev)
    - SUPABASE_ANON_KEY is accepted as an older name for the publishable key
    """
    load_dotenv(override=False)

    return AppConfig(
        supabase_url=_getenv("SUPABASE_URL") or "",
        supabase_key=_getenv("SUPABASE_PUBLISHABLE_KEY") or _getenv("SUPABASE_ANON_KEY"),
        request_timeout_s=float(_getenv("SUPABASE_TIMEOUT_S", "30") or "30"),
        default_use_mock=(_getenv("USE_MOCK_DATA", "true") or "true").lower() == "true",
        currency_label=_getenv("CURRENCY_LABEL", "KSh") or "KSh",
        log_level=(_getenv("LOG_LEVEL", "INFO") or "INFO").upper(),
    )
