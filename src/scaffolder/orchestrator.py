"""ScaffoldOrchestrator: sequences source resolution, hooks and rendering per scaffold."""

import logging
import shutil
from pathlib import Path

from scaffolder import events
from scaffolder.errors import CleanupFailed, ScaffoldError, ScaffoldFailed
from scaffolder.events import ScaffoldEvent
from scaffolder.hook_runner import HookRunner
from scaffolder.variable_context import build_context

logger = logging.getLogger(__name__)


class ScaffoldOrchestrator:
    """Processes the scaffolds of a configuration in order, failing fast.

    For each scaffold: resolve source, build context, pre-hook, render,
    post-hook. Temporary directories of remote sources are removed only
    after every scaffold has been attempted, including when one failed.

    Args:
        resolver: SourceResolver used to materialize scaffold sources.
        render_engine: RenderEngine writing the file entries.
        reporter: Receives a ScaffoldEvent for every step status change.
        hook_runner_factory: Callable(source_directory) -> hook runner.
    """

    def __init__(self, resolver, render_engine, reporter, hook_runner_factory=HookRunner):
        self._resolver = resolver
        self._render_engine = render_engine
        self._reporter = reporter
        self._hook_runner_factory = hook_runner_factory

    def run(self, config, settings):
        """Process every scaffold in *config* with the effective *settings*.

        Raises:
            ScaffoldFailed: The first scaffold failure, naming scaffold and step.
            CleanupFailed: If all scaffolds succeeded but a temporary directory
                could not be removed.
        """
        disposables = []
        succeeded = False
        try:
            for scaffold in config.scaffolds:
                self.process_scaffold(scaffold, settings, disposables)
            succeeded = True
        finally:
            self._cleanup(disposables, raise_on_failure=succeeded)

    def process_scaffold(self, scaffold, settings, disposables):
        """Run all steps of one scaffold, appending any temporary root to *disposables*."""
        name = scaffold.display_name
        resolved = self._step(name, events.RESOLVE, self._resolver.resolve, scaffold.repo, scaffold.name)
        if resolved.disposable:
            disposables.append(resolved.disposable_root)

        context = self._step(name, events.CONTEXT, build_context, settings.project_name, scaffold.variables)

        hooks = scaffold.hooks
        hook_runner = self._hook_runner_factory(resolved.directory)
        self._run_hook(name, events.PRE_HOOK, hook_runner, hooks.pre if hooks else None)

        outcomes = self._step(
            name, events.RENDER, self._render_engine.render,
            resolved.directory / scaffold.template_root,
            Path(settings.output),
            scaffold,
            context,
            settings.overwrite,
        )
        for outcome in outcomes:
            self._emit(name, events.RENDER, outcome.action, str(outcome.destination))

        self._run_hook(name, events.POST_HOOK, hook_runner, hooks.post if hooks else None)

    def _run_hook(self, name, step, hook_runner, script):
        if script is None:
            self._emit(name, step, events.SKIPPED, "no hook configured")
            return
        self._step(name, step, hook_runner.run, script)

    def _step(self, name, step, fn, *args):
        self._emit(name, step, events.STARTED)
        try:
            result = fn(*args)
        except ScaffoldError as e:
            self._emit(name, step, events.FAILED, str(e))
            raise ScaffoldFailed(name, step, e) from e
        self._emit(name, step, events.DONE)
        return result

    def _cleanup(self, disposables, raise_on_failure):
        failures = []
        for root in disposables:
            self._emit(None, events.CLEANUP, events.STARTED, str(root))
            try:
                shutil.rmtree(root)
            except OSError as e:
                logger.debug("Failed to remove %s", root, exc_info=True)
                self._emit(None, events.CLEANUP, events.FAILED, f"{root}: {e}")
                failures.append((root, e))
                continue
            self._emit(None, events.CLEANUP, events.DONE, str(root))

        if failures and raise_on_failure:
            _, error = failures[0]
            paths = ", ".join(str(path) for path, _ in failures)
            raise CleanupFailed(f"Failed to remove temporary directories: {paths}") from error

    def _emit(self, scaffold, step, status, detail=""):
        self._reporter.emit(ScaffoldEvent(scaffold, step, status, detail))
