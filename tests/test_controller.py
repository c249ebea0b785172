"""
Tests for the interaction controller (gui_integration.controller).

A small fake client records calls and lets each test decide the outcome.
"""

from __future__ import annotations

import pytest

from detectia.ai_engine.analyzer import AnalysisFailure
from detectia.config import ConfigurationError, DetectorConfig, LLMConfig
from detectia.gui_integration.controller import (
    MESSAGES,
    ConfigurationStatus,
    InteractionController,
    ViewState,
)
from detectia.model.schemas import AnalysisResult


class _FakeClient:
    def __init__(self, configured=True, result=None, error=None):
        self.configured = configured
        self.result = result
        self.error = error
        self.calls = []
        self.config_checks = 0
        self.controller = None
        self.states_during_call = []

    def is_configured(self):
        self.config_checks += 1
        return self.configured

    def analyze(self, text):
        self.calls.append(text)
        if self.controller is not None:
            self.states_during_call.append(self.controller.state)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def result(sample_payload):
    return AnalysisResult.from_dict(sample_payload)


def _mounted(client, language="en"):
    logs = []
    controller = InteractionController(client=client, language=language, log_func=logs.append)
    client.controller = controller
    assert controller.mount() is ConfigurationStatus.CONFIGURED
    return controller, logs


def test_mount_records_status_once():
    client = _FakeClient(configured=True)
    controller = InteractionController(client=client, log_func=None)

    assert controller.status is None
    assert controller.mount() is ConfigurationStatus.CONFIGURED
    assert controller.mount() is ConfigurationStatus.CONFIGURED
    assert client.config_checks == 1
    assert controller.state == ViewState(configured=True)


def test_unconfigured_blocks_every_trigger():
    client = _FakeClient(configured=False)
    controller = InteractionController(client=client, log_func=None)

    assert controller.mount() is ConfigurationStatus.UNCONFIGURED
    assert controller.state.configured is False
    assert controller.state.can_submit is False

    with pytest.raises(ConfigurationError):
        controller.set_input("text")
    with pytest.raises(ConfigurationError):
        controller.submit()
    with pytest.raises(ConfigurationError):
        controller.clear()
    assert client.calls == []


def test_triggers_before_mount_are_rejected():
    controller = InteractionController(client=_FakeClient(), log_func=None)

    with pytest.raises(RuntimeError, match="mount"):
        controller.submit()


@pytest.mark.parametrize("text", ["", " ", "\n\t  \n"])
def test_empty_input_sets_validation_error_without_call(text):
    client = _FakeClient()
    controller, _ = _mounted(client)

    controller.set_input(text)
    state = controller.submit()

    assert state.error == MESSAGES["en"]["validation"]
    assert state.result is None
    assert state.loading is False
    assert client.calls == []


def test_successful_submit(result):
    client = _FakeClient(result=result)
    controller, logs = _mounted(client)

    controller.set_input("Sample academic paragraph.")
    state = controller.submit()

    assert client.calls == ["Sample academic paragraph."]
    assert state.result == result
    assert state.result.probability == 82
    assert state.error is None
    assert state.loading is False
    assert any(line.startswith("[+]") for line in logs)


def test_loading_only_while_analyze_runs(result):
    client = _FakeClient(result=result)
    controller, _ = _mounted(client)
    controller.set_input("Sample academic paragraph.")

    assert controller.state.loading is False
    controller.submit()

    assert len(client.states_during_call) == 1
    during = client.states_during_call[0]
    assert during.loading is True
    assert during.result is None
    assert during.error is None
    assert during.can_submit is False
    assert during.can_clear is False
    assert controller.state.loading is False


def test_transport_failure_shows_generic_message_and_logs_detail():
    cause = ConnectionError("connection reset by peer")
    failure = AnalysisFailure("Analysis request failed")
    failure.__cause__ = cause
    client = _FakeClient(error=failure)
    controller, logs = _mounted(client)

    controller.set_input("Sample academic paragraph.")
    state = controller.submit()

    assert state.error == MESSAGES["en"]["failure"]
    assert "connection reset" not in state.error
    assert state.result is None
    assert state.loading is False
    assert any("connection reset by peer" in line for line in logs)


def test_unexpected_exception_also_resolves_loading():
    client = _FakeClient(error=KeyError("boom"))
    controller, _ = _mounted(client)

    controller.set_input("text")
    state = controller.submit()

    assert state.loading is False
    assert state.error == MESSAGES["en"]["failure"]


def test_new_attempt_clears_previous_error_before_call(result):
    client = _FakeClient(error=AnalysisFailure("down"))
    controller, _ = _mounted(client)
    controller.set_input("text")
    controller.submit()
    assert controller.state.error is not None

    client.error = None
    client.result = result
    state = controller.submit()

    assert client.states_during_call[-1].error is None
    assert state.result == result
    assert state.error is None


def test_failure_after_success_drops_previous_result(result):
    client = _FakeClient(result=result)
    controller, _ = _mounted(client)
    controller.set_input("text")
    controller.submit()

    client.error = AnalysisFailure("down")
    state = controller.submit()

    assert client.states_during_call[-1].result is None
    assert state.result is None
    assert state.error == MESSAGES["en"]["failure"]


def test_validation_error_after_success_drops_result(result):
    client = _FakeClient(result=result)
    controller, _ = _mounted(client)
    controller.set_input("text")
    controller.submit()

    controller.set_input("   ")
    state = controller.submit()

    assert state.result is None
    assert state.error == MESSAGES["en"]["validation"]


def test_each_submit_calls_client_once(result):
    client = _FakeClient(result=result)
    controller, _ = _mounted(client)
    controller.set_input("text")

    controller.submit()
    controller.submit()

    assert client.calls == ["text", "text"]


def test_clear_after_result_resets_everything(result):
    client = _FakeClient(result=result)
    controller, _ = _mounted(client)
    controller.set_input("Sample academic paragraph.")
    controller.submit()
    assert controller.state.can_clear is True

    state = controller.clear()

    assert state.input_text == ""
    assert state.result is None
    assert state.error is None
    assert state.can_clear is False


def test_clear_after_error_resets_everything():
    controller, _ = _mounted(_FakeClient())
    controller.submit()

    state = controller.clear()

    assert state == ViewState(configured=True)


def test_triggers_during_loading_are_ignored(result):
    client = _FakeClient(result=result)
    controller, _ = _mounted(client)
    controller.set_input("original")

    nested = []

    def reentrant_analyze(text):
        client.calls.append(text)
        nested.append(controller.submit())
        nested.append(controller.clear())
        nested.append(controller.set_input("changed"))
        return result

    client.analyze = reentrant_analyze
    state = controller.submit()

    assert client.calls == ["original"]
    assert all(s.loading for s in nested)
    assert all(s.input_text == "original" for s in nested)
    assert state.input_text == "original"
    assert state.result == result


def test_view_state_derived_flags():
    assert ViewState(configured=True, input_text="  ").can_submit is False
    assert ViewState(configured=True, input_text="  ").can_clear is True
    assert ViewState(configured=True, input_text="abc").character_count == 3
    assert ViewState(configured=False, input_text="abc").can_submit is False


def test_spanish_messages():
    controller, _ = _mounted(_FakeClient(), language="es")

    state = controller.submit()

    assert state.error == "Por favor, introduce texto para analizar."


def test_unknown_language_is_rejected():
    with pytest.raises(ValueError):
        InteractionController(client=_FakeClient(), language="fr")


def test_from_config_without_key_is_unconfigured():
    config = DetectorConfig(llm=LLMConfig(provider="openai"), language="en")
    controller = InteractionController.from_config(config, log_func=None)

    assert controller.mount() is ConfigurationStatus.UNCONFIGURED
    assert "OPENAI_API_KEY" in controller.configuration_help()["action"]


def test_from_config_with_key_is_configured():
    config = DetectorConfig(llm=LLMConfig(provider="gemini", api_key="k"), language="es")
    controller = InteractionController.from_config(config, log_func=None)

    assert controller.mount() is ConfigurationStatus.CONFIGURED
    assert controller.language == "es"
