import json
import logging
import shlex
from typing_extensions import override

import anyio.to_thread

from gjp_mcp.models.project import Phase, PhaseTransition
from gjp_mcp.tools.base import Tool, ToolCallArguments, ToolError, ToolExecResult, ToolParameter
from gjp_mcp.tools.project.lock import ThreadLock
from gjp_mcp.tools.project.project import InvalidProjectError, PhaseError, Project
from gjp_mcp.tools.run import ExecutionFailed
from gjp_mcp.utils.config import ServiceConfig

logger = logging.getLogger(__name__)

PhaseToolCommands = ["init", "gather", "dry_run", "finish", "status", "build"]


class PhaseTool(Tool):
    """
    Tool for driving the phases of a gjp project.
    Supports init, gather, dry_run, finish, status and build operations.

    Project operations block on git, so they run in a worker thread. A lock
    shared by every call keeps them serialized.
    """

    def __init__(self, config: ServiceConfig | None = None) -> None:
        self._config = config or ServiceConfig()
        self._lock = ThreadLock()

    @override
    def get_name(self) -> str:
        return "gjp"

    @override
    def get_description(self) -> str:
        return """
        Manages the phases of a gjp project (a directory with src/, kit/ and a git repository).
        - `init`: Turns a directory into a project and starts gathering.
        - `gather`: Starts a gathering phase. New files in src/ and kit/ are recorded as package inputs.
        - `dry_run`: Starts a dry-running phase. src/ is restored to its current state when the phase is finished.
        - `finish`: Ends the active phase and updates the lists in file_lists/.
        - `status`: Shows the active phase and the snapshot tag counters.
        - `build`: Runs `build_command` from the project root. Only allowed while dry-running.
        Starting a phase while the other one is active finishes the active one first.
        """

    @override
    def get_parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="command",
                type="string",
                description=f"The command to run. Allowed options are: {', '.join(PhaseToolCommands)}.",
                required=True,
                enum=PhaseToolCommands,
            ),
            ToolParameter(
                name="path",
                type="string",
                description="A path inside the project. For `init`, the directory to turn into a project.",
                required=True,
            ),
            ToolParameter(
                name="build_command",
                type="string",
                description="For `build` command. The build to run, e.g. `ant -f src/foo/build.xml jar`.",
                required=False,
            ),
        ]

    @override
    async def execute(self, arguments: ToolCallArguments) -> ToolExecResult:
        command = arguments.get("command")
        path_str = arguments.get("path")

        if not isinstance(command, str) or command not in PhaseToolCommands:
            return ToolExecResult(
                error=f"A valid 'command' is required: {', '.join(PhaseToolCommands)}.", error_code=1
            )
        if not path_str or not isinstance(path_str, str):
            return ToolExecResult(error="The 'path' parameter is required.", error_code=1)

        build_command = arguments.get("build_command")
        if command == "build" and (not build_command or not isinstance(build_command, str)):
            return ToolExecResult(error="The 'build_command' parameter is required for build.", error_code=1)

        try:
            return await anyio.to_thread.run_sync(self._run, command, path_str, build_command)
        except (InvalidProjectError, PhaseError) as e:
            return ToolExecResult(error=str(e), error_code=1)
        except ExecutionFailed as e:
            logger.error(f"gjp {command} aborted: {e}")
            return ToolExecResult(error=f"{e}\n{e.stderr}".strip(), output=e.stdout, error_code=e.status)
        except ToolError as e:
            return ToolExecResult(error=e.message, error_code=1)

    def _project(self, path_str: str) -> Project:
        return Project(path_str, config=self._config, lock=self._lock)

    def _run(self, command: str, path_str: str, build_command: str | None) -> ToolExecResult:
        match command:
            case "init":
                project = Project.init(path_str, config=self._config, lock=self._lock)
                transition = PhaseTransition(requested=command, changed=True, phase=project.get_status())
            case "gather":
                project = self._project(path_str)
                changed = project.gather()
                transition = PhaseTransition(requested=command, changed=changed, phase=project.get_status())
            case "dry_run":
                project = self._project(path_str)
                changed = project.dry_run()
                transition = PhaseTransition(requested=command, changed=changed, phase=project.get_status())
            case "finish":
                project = self._project(path_str)
                closed = project.finish()
                transition = PhaseTransition(
                    requested=command,
                    changed=closed != Phase.NONE,
                    phase=project.get_status(),
                    closed=closed,
                )
            case "status":
                status = self._project(path_str).status()
                return ToolExecResult(output=json.dumps(status.model_dump(mode="json"), indent=2))
            case "build":
                return ToolExecResult(output=self._project(path_str).build(shlex.split(build_command)))
            case _:
                raise ToolError(f"Unknown command: {command}")

        return ToolExecResult(output=json.dumps(transition.model_dump(mode="json"), indent=2))
