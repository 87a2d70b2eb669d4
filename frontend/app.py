import datetime as dt
import os
from typing import Any, Dict, List, Optional

import pandas as pd
import requests
import streamlit as st
from dotenv import load_dotenv

from commit_digest.services.credential_store import TOKEN_KEY, USERNAME_KEY, CredentialStore

load_dotenv()

API_BASE = os.getenv("API_BASE", "http://127.0.0.1:8000")

CUSTOM_CSS = """
<style>
:root {
  --bg: #f3f4f6;
  --card: #ffffff;
  --text: #1f2937;
  --muted: #6b7280;
  --accent: #6366f1;
}
.main, .block-container { background: var(--bg); }
.stSidebar button {
  background: var(--accent) !important;
  border: none !important;
  color: white !important;
  font-weight: 700;
}
.empty-state {
  background: #eef2ff;
  color: var(--text);
  border: 1px solid #c7d2fe;
  padding: 0.9rem 1rem;
  border-radius: 12px;
}
.row-meta { color: var(--muted); font-size: 0.9rem; }
</style>
"""


# All API calls share timeout/error handling; the backend's detail is shown as-is.
def post(path: str, payload: Dict[str, Any]) -> Optional[Any]:
    url = f"{API_BASE}{path}"
    try:
        resp = requests.post(url, json=payload, timeout=180)
    except requests.RequestException as exc:
        st.error(f"API request failed: {url} / {exc}")
        return None
    if not resp.ok:
        try:
            detail = resp.json().get("detail")
        except ValueError:
            detail = None
        st.error(detail or f"API request failed: {resp.status_code} {resp.reason}")
        return None
    return resp.json()


st.set_page_config(page_title="GitLab Commits Fetcher", layout="wide")
st.markdown(CUSTOM_CSS, unsafe_allow_html=True)

st.title("GitLab Commits Fetcher")
st.caption("Commits across all of your GitLab projects, grouped by day and project.")

store = CredentialStore(st.session_state)

# ---------- Sidebar: credentials & range ----------

st.sidebar.header("GitLab")

stored_user = store.get(USERNAME_KEY) or ""
if stored_user:
    st.sidebar.caption(f"Saved user: {stored_user}")

username = st.sidebar.text_input("Username", value=stored_user)
token = st.sidebar.text_input("Personal access token", value=store.get(TOKEN_KEY) or "", type="password")
email = st.sidebar.text_input("Author email (optional)", value="")

default_until = dt.date.today()
default_since = default_until - dt.timedelta(days=7)
since_date = st.sidebar.date_input("Start date", value=default_since)
until_date = st.sidebar.date_input("End date", value=default_until)

col_fetch, col_clear = st.sidebar.columns(2)
fetch_button = col_fetch.button("Fetch commits", type="primary")
if col_clear.button("Forget me"):
    store.clear()
    st.session_state.pop("rows", None)
    st.rerun()


def build_payload() -> Dict[str, Any]:
    return {
        "username": username,
        "token": token,
        "email": email or None,
        "since": f"{since_date.isoformat()}T00:00:00Z" if since_date else None,
        "until": f"{until_date.isoformat()}T23:59:59Z" if until_date else None,
    }


if fetch_button:
    if not username or not token or not since_date or not until_date:
        st.error("Please enter username, token, and select a date range.")
    else:
        store.save(username, token)
        # 실패 시 이전 결과를 남기지 않음
        st.session_state.pop("rows", None)
        with st.spinner("Loading commits..."):
            result = post("/commits/aggregate", build_payload())
        if result is not None:
            st.session_state["rows"] = result

# ---------- Rows ----------

rows: Optional[List[Dict[str, Any]]] = st.session_state.get("rows")

if rows is None:
    st.markdown(
        '<div class="empty-state">Enter your GitLab credentials and a date range, then press <b>Fetch commits</b>.</div>',
        unsafe_allow_html=True,
    )
elif not rows:
    st.info("No commits found in the selected range.")
else:
    df = pd.DataFrame(rows).set_index("id")
    df = df.rename(columns={"date": "Date", "time": "Time", "projectName": "Project", "commits": "Commits"})
    st.dataframe(df, use_container_width=True)

    st.markdown("#### Copy")
    # st.code renders a copy-to-clipboard button on each block
    for row in rows:
        st.markdown(
            f'<div class="row-meta">#{row["id"]} · {row["date"]} {row["time"]}</div>',
            unsafe_allow_html=True,
        )
        col_project, col_commits = st.columns([1, 3])
        with col_project:
            st.code(row["projectName"], language=None)
        with col_commits:
            st.code(row["commits"], language=None)
