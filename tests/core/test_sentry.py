# -*- coding: utf-8 -*-
"""Tests for Sentry error tracking integration."""

from unittest.mock import patch

from nestfest.core.sentry import (
    _before_send,
    capture_exception,
    set_user_context,
    setup_sentry,
)


class TestSentrySetup:
    """Tests for Sentry initialization."""

    def test_setup_sentry_without_dsn(self):
        """Test that Sentry is not initialized without DSN."""
        with patch("nestfest.core.sentry.get_settings") as mock_settings:
            mock_settings.return_value.sentry_dsn = ""

            result = setup_sentry()

            assert result is False

    def test_setup_sentry_with_dsn(self):
        """Test that Sentry is initialized with valid DSN."""
        with patch("nestfest.core.sentry.get_settings") as mock_settings:
            mock_settings.return_value.sentry_dsn = "https://key@sentry.io/123"
            mock_settings.return_value.app_env.value = "test"
            mock_settings.return_value.app_name = "NEST FEST"
            mock_settings.return_value.app_version = "0.1.0"
            mock_settings.return_value.sentry_traces_sample_rate = 0.1
            mock_settings.return_value.sentry_profiles_sample_rate = 0.1

            with patch("sentry_sdk.init") as mock_init:
                result = setup_sentry()

                assert result is True
                mock_init.assert_called_once()
                assert mock_init.call_args.kwargs["release"] == "NEST FEST@0.1.0"

    def test_setup_sentry_init_failure(self):
        """Test initialization errors are logged, not raised."""
        with patch("nestfest.core.sentry.get_settings") as mock_settings:
            mock_settings.return_value.sentry_dsn = "https://key@sentry.io/123"
            mock_settings.return_value.app_env.value = "test"

            with patch("sentry_sdk.init", side_effect=RuntimeError("bad dsn")):
                assert setup_sentry() is False


class TestBeforeSend:
    """Tests for the _before_send filter."""

    def test_before_send_passes_normal_event(self):
        """Test that normal events are passed through."""
        event = {"exception": {"values": [{"type": "ValueError"}]}}

        assert _before_send(event, {}) == event

    def test_before_send_filters_rate_limited(self):
        """Test that client rate limiting is filtered out."""

        class RateLimitedError(Exception):
            pass

        event = {"exception": {"values": [{"type": "RateLimitedError"}]}}
        hint = {"exc_info": (RateLimitedError, RateLimitedError(), None)}

        assert _before_send(event, hint) is None

    def test_before_send_filters_validation_error(self):
        """Test that RequestValidationError is filtered out."""

        class RequestValidationError(Exception):
            pass

        event = {"exception": {"values": [{"type": "RequestValidationError"}]}}
        hint = {"exc_info": (RequestValidationError, RequestValidationError(), None)}

        assert _before_send(event, hint) is None

    def test_before_send_keeps_upstream_failures(self):
        """Test server-side failures still reach Sentry."""

        class SheetsError(Exception):
            pass

        event = {"exception": {"values": [{"type": "SheetsError"}]}}
        hint = {"exc_info": (SheetsError, SheetsError(), None)}

        assert _before_send(event, hint) == event


class TestCaptureException:
    """Tests for capture_exception function."""

    def test_capture_exception_without_sentry(self):
        """Test capture_exception when sentry is not available."""
        with patch.dict("sys.modules", {"sentry_sdk": None}):
            result = capture_exception(ValueError("test error"))
            assert result is None

    def test_capture_exception_not_initialized(self):
        """Test capture_exception is harmless when Sentry was never initialized."""
        result = capture_exception(ValueError("test error"), path="/api/v1/submit")

        assert result is None or isinstance(result, str)


class TestSetUserContext:
    """Tests for set_user_context function."""

    def test_set_user_context_without_sentry(self):
        """Test set_user_context when sentry is not available."""
        with patch.dict("sys.modules", {"sentry_sdk": None}):
            set_user_context(email="admin@nestfest.org", role="admin")

    def test_set_user_context_sets_user(self):
        """Test the admin's email and role are attached."""
        with patch("sentry_sdk.set_user") as mock_set_user:
            set_user_context(email="admin@nestfest.org", role="admin")

        mock_set_user.assert_called_once_with({"email": "admin@nestfest.org", "role": "admin"})

    def test_set_user_context_with_none(self):
        """Test an empty context clears the user."""
        with patch("sentry_sdk.set_user") as mock_set_user:
            set_user_context()

        mock_set_user.assert_called_once_with(None)
