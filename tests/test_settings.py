import pytest

from deptportal.settings import DEFAULT_INSTITUTION_NAME, InstitutionSettings


def test_defaults():
    assert InstitutionSettings().get() == {"institution_name": DEFAULT_INSTITUTION_NAME, "logo_url": None}


def test_listeners_called_in_registration_order():
    settings = InstitutionSettings()
    calls = []
    settings.subscribe(lambda s: calls.append(("first", s["logo_url"])))
    settings.subscribe(lambda s: calls.append(("second", s["logo_url"])))
    settings.update(logo_url="logo.png")
    assert calls == [("first", "logo.png"), ("second", "logo.png")]


def test_unsubscribe_stops_notifications():
    settings = InstitutionSettings()
    calls = []
    unsubscribe = settings.subscribe(calls.append)
    unsubscribe()
    unsubscribe()
    settings.update(institution_name="Other College")
    assert calls == []
    assert settings.get()["institution_name"] == "Other College"


def test_listener_gets_a_snapshot():
    settings = InstitutionSettings()
    seen = []
    settings.subscribe(seen.append)
    settings.update(logo_url="a.png")
    seen[0]["logo_url"] = "tampered"
    assert settings.get()["logo_url"] == "a.png"


def test_failing_listener_propagates():
    settings = InstitutionSettings()
    calls = []

    def broken(_):
        raise RuntimeError("listener down")

    settings.subscribe(broken)
    settings.subscribe(calls.append)
    with pytest.raises(RuntimeError):
        settings.update(logo_url="x.png")
    assert calls == []
    assert settings.get()["logo_url"] == "x.png"


def test_unknown_setting_rejected():
    with pytest.raises(KeyError):
        InstitutionSettings().update(theme="dark")
