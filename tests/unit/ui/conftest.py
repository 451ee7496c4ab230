"""Configuration for UI unit tests."""

import pytest


class SessionState(dict):
    """Dict with attribute access, like st.session_state."""

    def __getattr__(self, key):
        try:
            return self[key]
        except KeyError as e:
            raise AttributeError(key) from e

    def __setattr__(self, key, value):
        self[key] = value


@pytest.fixture
def session_state():
    return SessionState()
