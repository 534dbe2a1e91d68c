"""Tests for the custom error hierarchy."""

import pytest

from tooncraft.errors import (
    ApplicationError,
    DecodeError,
    DomainError,
    EncodeError,
    InfrastructureError,
    RenderError,
    SessionBusyError,
    SessionClosedError,
    SettingsError,
    SettingsLoadError,
    SettingsValidationError,
    ToonCraftError,
    ValidationError,
)


@pytest.mark.parametrize("layer", [DomainError, InfrastructureError, ApplicationError, SettingsError])
def test_layers_are_tooncraft_errors(layer):
    assert issubclass(layer, ToonCraftError)
    assert isinstance(layer("x"), ToonCraftError)


def test_validation_error_is_domain_and_value_error():
    assert issubclass(ValidationError, DomainError)
    assert isinstance(ValidationError("zoom"), ValueError)


@pytest.mark.parametrize("error", [DecodeError, EncodeError])
def test_codec_errors_are_infrastructure_errors(error):
    assert issubclass(error, InfrastructureError)


@pytest.mark.parametrize("error", [RenderError, SessionBusyError, SessionClosedError])
def test_render_and_session_errors_are_application_errors(error):
    assert issubclass(error, ApplicationError)


@pytest.mark.parametrize("error", [SettingsLoadError, SettingsValidationError])
def test_settings_errors(error):
    assert issubclass(error, SettingsError)


def test_error_message():
    err = DecodeError("could not decode image data")
    assert str(err) == "could not decode image data"
