from replyhub.models.user import User
from replyhub.models.sandbox_environment import SandboxEnvironment
from replyhub.models.sandbox_endpoint import SandboxApiEndpoint
from replyhub.models.sandbox_scenario import SandboxTestScenario
from replyhub.models.sandbox_log import SandboxLog

__all__ = [
    "User",
    # Sandbox
    "SandboxEnvironment",
    "SandboxApiEndpoint",
    "SandboxTestScenario",
    "SandboxLog",
]
