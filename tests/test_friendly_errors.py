"""Tests for user-friendly error messages."""

from refiner.exceptions import (
    AnalysisError,
    ConfigError,
    JsonRecoveryError,
    OutputError,
    ProviderAuthError,
    ProviderError,
    ProviderRateLimitError,
    ValidationError,
)
from refiner.friendly_errors import (
    FriendlyError,
    format_friendly_error,
    friendly_error,
)


def _chained(outer: Exception, cause: Exception) -> Exception:
    try:
        try:
            raise cause
        except Exception as e:
            raise outer from e
    except Exception as e:
        return e


class TestFriendlyProviderErrors:
    def test_auth_error(self):
        err = friendly_error(ProviderAuthError("Invalid OpenAI API key."))
        assert "key" in err.title.lower()
        assert "OPENAI_API_KEY" in err.fix
        assert "refiner config" in err.fix

    def test_auth_error_through_analysis_error(self):
        exc = _chained(
            AnalysisError("Analysis failed: Invalid Claude API key."),
            ProviderAuthError("Invalid Claude API key."),
        )
        err = friendly_error(exc)
        assert "key" in err.title.lower()
        assert err.message == "Invalid Claude API key."

    def test_rate_limit(self):
        err = friendly_error(ProviderRateLimitError("Rate limit exceeded."))
        assert "rate" in err.title.lower()
        assert "wait" in err.fix.lower()

    def test_model_not_found(self):
        err = friendly_error(ProviderError("Model gpt-x not found or not accessible."))
        assert "model" in err.title.lower()
        assert "refiner info" in err.fix

    def test_safety_block(self):
        err = friendly_error(ProviderError("Content was blocked by safety filters."))
        assert "safety" in err.title.lower()
        assert "rephrase" in err.fix.lower()

    def test_generic_provider_error(self):
        err = friendly_error(ProviderError("OpenAI API Error: boom"))
        assert err.title
        assert "boom" in err.message


class TestFriendlyOtherErrors:
    def test_json_recovery(self):
        exc = _chained(
            AnalysisError("Analysis failed"),
            JsonRecoveryError("legacy", "oops", "Expecting value"),
        )
        err = friendly_error(exc)
        assert "reply" in err.title.lower()
        assert "--verbose" in err.fix

    def test_config_error(self):
        err = friendly_error(ConfigError("Cannot read config file"))
        assert "configuration" in err.title.lower()
        assert "refiner config" in err.fix

    def test_validation_error_through_analysis_error(self):
        exc = _chained(
            AnalysisError("Analysis failed: too short"),
            ValidationError("Prompt must be at least 5 characters long"),
        )
        err = friendly_error(exc)
        assert err.title == "Invalid input"
        assert "at least 5" in err.message

    def test_output_error(self):
        err = friendly_error(OutputError("Failed to copy to clipboard: no tool"))
        assert "deliver" in err.title.lower()
        assert "--output file" in err.fix

    def test_missing_sdk(self):
        err = friendly_error(
            ImportError("OpenAI SDK not installed. Run: pip install refiner-cli[openai]")
        )
        assert err.title == "Provider SDK not installed"
        assert "refiner-cli[openai]" in err.message
        assert "refiner-cli[all]" in err.fix

    def test_unknown_error(self):
        err = friendly_error(RuntimeError("weird"))
        assert err.message == "weird"
        assert "--verbose" in err.fix


class TestFormatFriendlyError:
    def test_format_includes_all_parts(self):
        err = FriendlyError(
            title="Test Title",
            message="Test message",
            fix="Step 1\nStep 2",
        )
        output = format_friendly_error(err)
        assert "Test Title" in output
        assert "Test message" in output
        assert "How to fix:" in output
        assert "   Step 1" in output
        assert "   Step 2" in output


class TestFriendlyAnalysisErrors:
    def test_schema_mismatch(self):
        err = friendly_error(AnalysisError("Expected a JSON object from the model, got list"))
        assert err.title == "Analysis failed"
        assert "got list" in err.message
