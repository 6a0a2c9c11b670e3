"""Constants for API endpoints and configuration."""

# API endpoints
DEFAULT_BASE_URL = "https://marco-api-dev.uk.r.appspot.com"
AGENTS_ENDPOINT = "/v2/agents/agents"
AGENT_DETAILS_ENDPOINT = "/v2/agents/agent-details"
TOOLS_ENDPOINT = "/v2/agents/tools"
SKILLS_ENDPOINT = "/v2/agents/skills"
SESSIONS_ENDPOINT = "/v2/agents/sessions"
TASKS_ENDPOINT = "/v2/agents/tasks"
CURRICULUMS_ENDPOINT = "/v2/agents/curriculums"
MODULES_ENDPOINT = "/v2/agents/modules"
TEST_CHAT_ENDPOINT = "/chat/test-chat"
TEST_SKILL_ENDPOINT = "/chat/test-skill"

# HTTP configuration
USER_AGENT = "agent-factory-sdk/0.1"
DEFAULT_TIMEOUT = 60.0

# Function calls the server may issue in a chat response
SWITCH_TASK = "switchTask"
SWITCH_SESSION = "switchSession"
USE_SKILL = "useSkill"
DEFAULT_SKILL_MESSAGE = "Using skill"
