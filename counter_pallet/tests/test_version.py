import counter_pallet
from counter_pallet import version


def test_env_override_wins(monkeypatch):
    version.git_describe.cache_clear()
    monkeypatch.setenv("COUNTER_PALLET_GIT_DESCRIBE", " v0.1.0-3-gabc-dirty ")
    try:
        assert counter_pallet.git_describe() == "v0.1.0-3-gabc-dirty"
    finally:
        version.git_describe.cache_clear()


def test_falls_back_to_local_version(monkeypatch):
    version.git_describe.cache_clear()
    monkeypatch.delenv("COUNTER_PALLET_GIT_DESCRIBE", raising=False)
    monkeypatch.setenv("PATH", "")
    try:
        assert version.git_describe() == counter_pallet.__version__ + "+local"
    finally:
        version.git_describe.cache_clear()
