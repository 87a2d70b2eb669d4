from __future__ import annotations

from streamlit.testing.v1 import AppTest


def _text_input(app: AppTest, label: str):
    return next(w for w in app.text_input if w.label == label)


def test_credentials_prefilled_but_email_is_not() -> None:
    app = AppTest.from_file("../frontend/app.py", default_timeout=30)
    app.session_state["credentials.username"] = "alice"
    app.session_state["credentials.token"] = "t0ken"
    app.session_state["credentials.email"] = "stale@x.com"

    app.run()

    assert not app.exception
    assert _text_input(app, "Username").value == "alice"
    assert _text_input(app, "Personal access token").value == "t0ken"
    assert _text_input(app, "Author email (optional)").value == ""
