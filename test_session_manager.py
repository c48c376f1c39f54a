from types import SimpleNamespace

import pytest

import event_schema_editor.session_manager as session_manager
from event_schema_editor.config_loader import get_default_config
from event_schema_editor.editor_controller import EditorMode
from event_schema_editor.session_manager import CONTROLLER_KEY, SessionManager


class _SessionState:
    def __init__(self, initial=None):
        super().__setattr__("_data", dict(initial or {}))

    def get(self, key, default=None):
        return self._data.get(key, default)

    def __getitem__(self, key):
        return self._data[key]

    def __setitem__(self, key, value):
        self._data[key] = value

    def __contains__(self, key):
        return key in self._data

    def __getattr__(self, name):
        if name in self._data:
            return self._data[name]
        raise AttributeError(name)

    def __setattr__(self, name, value):
        if name == "_data":
            super().__setattr__(name, value)
        else:
            self._data[name] = value


SCHEMA = {
    "type": "object",
    "properties": {"email": {"type": "string", "format": "email"}},
    "required": ["email"],
}


@pytest.fixture
def config(tmp_path):
    config = get_default_config()
    config['storage']['schemas_dir'] = str(tmp_path / "schemas")
    config['editor']['json_indent'] = 4
    return config


@pytest.fixture
def st(monkeypatch, config):
    mock_st = SimpleNamespace(session_state=_SessionState())
    monkeypatch.setattr(session_manager, "st", mock_st)
    SessionManager.initialize(config)
    return mock_st


def test_initialize_sets_defaults(st, config):
    assert st.session_state.config is config
    assert st.session_state.loaded_event_type is None
    assert st.session_state.session_id.startswith("session_")


def test_initialize_keeps_existing_values(st, config):
    st.session_state.loaded_event_type = "order_placed"

    SessionManager.initialize(config)

    assert st.session_state.loaded_event_type == "order_placed"


def test_store_uses_configured_directory(st, config):
    store = SessionManager.get_store()

    assert str(store.root) == config['storage']['schemas_dir']
    assert SessionManager.get_store() is store


def test_controller_created_once_with_editor_settings(st):
    controller = SessionManager.get_controller()

    assert controller.json_indent == 4
    assert controller.mode == EditorMode.FORM
    assert SessionManager.get_controller() is controller


def test_controller_submits_to_store(st):
    controller = SessionManager.get_controller()
    controller.start_adding_field().update(name="email", type="email")
    controller.save_field()
    controller.set_event_type("Order_Placed")

    assert controller.submit().success

    assert SessionManager.get_store().list_versions("order_placed") == [1]


def test_load_event_type(st):
    SessionManager.get_store().submit("order_placed", SCHEMA)

    assert SessionManager.load_event_type("order_placed") is True

    controller = SessionManager.get_controller()
    assert controller.event_type == "order_placed"
    assert [f.name for f in controller.fields] == ["email"]
    assert controller.baseline == SCHEMA
    assert SessionManager.get_loaded_event_type() == "order_placed"


def test_load_unknown_event_type(st):
    previous = SessionManager.get_controller()

    assert SessionManager.load_event_type("missing") is False
    assert SessionManager.get_controller() is previous


def test_load_undecodable_schema(st):
    SessionManager.get_store().submit("broken", {"type": "object"})

    assert SessionManager.load_event_type("broken") is False
    assert SessionManager.get_loaded_event_type() is None


def test_new_schema_resets_editor(st):
    SessionManager.get_store().submit("order_placed", SCHEMA)
    SessionManager.load_event_type("order_placed")

    SessionManager.new_schema()

    assert SessionManager.get_controller().fields == []
    assert SessionManager.get_loaded_event_type() is None


def test_session_info(st):
    SessionManager.get_controller().start_adding_field()

    info = SessionManager.get_session_info()

    assert info['mode'] == "form"
    assert info['field_count'] == 0
    assert info['field_session_open'] is True
    assert st.session_state[CONTROLLER_KEY] is not None


def test_replacing_editor_bumps_revision(st):
    SessionManager.get_store().submit("order_placed", SCHEMA)
    assert SessionManager.get_editor_revision() == 0

    SessionManager.load_event_type("order_placed")
    assert SessionManager.get_editor_revision() == 1

    SessionManager.new_schema()
    assert SessionManager.get_editor_revision() == 2


def test_failed_load_keeps_revision(st):
    SessionManager.load_event_type("missing")

    assert SessionManager.get_editor_revision() == 0


def test_initialize_tracks_only_editor_state(st):
    assert 'last_submission' not in st.session_state
    assert st.session_state.editor_revision == 0
