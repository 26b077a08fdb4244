"""Tests for custom exception classes."""

from task_board.exceptions import (
    ConfigurationException,
    ErrorCode,
    TaskBoardException,
    TaskNotFoundException,
    TaskStoreException,
    TemplateNotFoundException,
    TemplateRenderException,
)


class TestErrorCodes:
    """Tests for ErrorCode enum."""

    def test_error_code_values(self):
        """Test that error codes have correct values."""
        assert ErrorCode.TASK_BOARD_ERROR == "TASK_BOARD_ERROR"
        assert ErrorCode.TEMPLATE_NOT_FOUND == "TEMPLATE_NOT_FOUND"
        assert ErrorCode.TASK_NOT_FOUND == "TASK_NOT_FOUND"

    def test_only_raised_codes_are_defined(self):
        """Test that no code exists without an exception raising it."""
        assert set(ErrorCode.__members__) == {
            "TASK_BOARD_ERROR",
            "TEMPLATE_NOT_FOUND",
            "TEMPLATE_RENDER_ERROR",
            "TASK_STORE_ERROR",
            "TASK_NOT_FOUND",
            "CONFIG_ERROR",
        }


class TestTaskBoardException:
    """Tests for TaskBoardException."""

    def test_defaults(self):
        """Test creating basic exception."""
        exc = TaskBoardException(message="Test error")

        assert exc.message == "Test error"
        assert exc.code == ErrorCode.TASK_BOARD_ERROR
        assert exc.status_code == 500
        assert exc.details == {}
        assert str(exc) == "Test error"

    def test_with_details(self):
        """Test exception with details."""
        exc = TaskBoardException(
            message="Test error", code=ErrorCode.TASK_STORE_ERROR, status_code=503, details={"key": "value"}
        )

        assert exc.code == ErrorCode.TASK_STORE_ERROR
        assert exc.status_code == 503
        assert exc.details["key"] == "value"


class TestTemplateExceptions:
    """Tests for rendering exceptions."""

    def test_template_not_found_is_server_error(self):
        """Test a missing template is fatal for the request (500)."""
        exc = TemplateNotFoundException("tasks/missing.html")

        assert isinstance(exc, TaskBoardException)
        assert exc.status_code == 500
        assert exc.code == ErrorCode.TEMPLATE_NOT_FOUND
        assert exc.template_name == "tasks/missing.html"
        assert exc.details["template_name"] == "tasks/missing.html"

    def test_template_render_exception(self):
        """Test render failures keep the template name."""
        exc = TemplateRenderException("boom", "tasks/index.html")

        assert exc.status_code == 500
        assert exc.code == ErrorCode.TEMPLATE_RENDER_ERROR
        assert exc.details == {"template_name": "tasks/index.html"}


class TestTaskStoreExceptions:
    """Tests for task store exceptions."""

    def test_store_exception_defaults(self):
        exc = TaskStoreException(message="Store offline")

        assert exc.code == ErrorCode.TASK_STORE_ERROR
        assert exc.status_code == 500

    def test_task_not_found(self):
        """Test unknown task ids map to 404."""
        exc = TaskNotFoundException(42)

        assert isinstance(exc, TaskStoreException)
        assert exc.status_code == 404
        assert exc.code == ErrorCode.TASK_NOT_FOUND
        assert exc.task_id == 42
        assert "42" in exc.message


class TestConfigurationException:
    """Tests for ConfigurationException."""

    def test_config_exception_defaults(self):
        exc = ConfigurationException(message="Config error")

        assert exc.code == ErrorCode.CONFIG_ERROR
        assert exc.status_code == 500
