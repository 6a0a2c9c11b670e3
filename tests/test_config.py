import pytest
from pydantic import ValidationError

from agent_factory.config import AgentFactoryOptions, options_from_env
from agent_factory.utils.constants import DEFAULT_BASE_URL, DEFAULT_TIMEOUT


class TestOptions:
    """Test suite for handler options."""

    @pytest.mark.unit
    def test_auto_execution_defaults_on(self) -> None:
        options = AgentFactoryOptions()

        assert options.auto_use_skill is True
        assert options.auto_switch_task is True
        assert options.auto_switch_session is True

    @pytest.mark.unit
    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            AgentFactoryOptions(timeout=0)

    @pytest.mark.unit
    def test_from_env(self, mock_env_vars: None) -> None:
        options = options_from_env()

        assert options.base_url == "https://env.agentfactory.test"
        assert options.timeout == 15.0
        assert options.debug is True

    @pytest.mark.unit
    def test_from_empty_env(self, empty_env: None) -> None:
        options = options_from_env()

        assert options.base_url == DEFAULT_BASE_URL
        assert options.timeout == DEFAULT_TIMEOUT
        assert options.debug is False

    @pytest.mark.unit
    def test_overrides_win(self, mock_env_vars: None) -> None:
        options = options_from_env(base_url="https://override.test", auto_switch_task=False)

        assert options.base_url == "https://override.test"
        assert options.timeout == 15.0
        assert options.auto_switch_task is False
