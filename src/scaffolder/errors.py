"""Error taxonomy for scaffold processing.

Every error is terminal for the scaffold that raised it. Third-party failures
are translated into these types where the collaborator is called, with the
original exception chained as ``__cause__``.
"""


class ScaffoldError(Exception):
    """Base class for all errors raised while scaffolding a project."""


class ConfigParseError(ScaffoldError):
    """The configuration file is missing, unreadable, or malformed."""


class SourceNotFound(ScaffoldError):
    """A local scaffold source does not exist or is not a directory."""


class CloneFailed(ScaffoldError):
    """A remote scaffold source could not be cloned."""


class TemplateSyntaxError(ScaffoldError):
    """A template file could not be registered with the template engine."""


class RenderError(ScaffoldError):
    """A template or destination path could not be rendered."""


class SourceFileMissing(ScaffoldError):
    """A file entry points at a source file that does not exist."""


class HookFailed(ScaffoldError):
    """A lifecycle hook script could not be run or exited unsuccessfully."""

    def __init__(self, script_path, exit_status=None, reason=None):
        self.script_path = script_path
        self.exit_status = exit_status
        if reason is None:
            reason = f"exited with status {exit_status}"
        super().__init__(f"Hook script {script_path} {reason}")


class CleanupFailed(ScaffoldError):
    """A disposable source directory could not be removed."""


class ScaffoldFailed(ScaffoldError):
    """Wraps the error that aborted a scaffold with the scaffold and step names."""

    def __init__(self, scaffold_name, step, cause):
        self.scaffold_name = scaffold_name
        self.step = step
        self.cause = cause
        super().__init__(f"Scaffold '{scaffold_name}' failed during {step}: {cause}")
