"""
Workflow Runner - replays a whole Intent Spec, one step at a time.

Steps are strictly sequential: each step's locators are resolved against the
DOM left behind by the step before it. A run stops at the first fatal
failure; steps whose ``skipOnError`` is set fail without stopping it.

Cancellation is cooperative. The flag is checked between steps only, and a
cancelled run returns what it has so far plus a ``<cancelled>`` outcome.

Example:
    >>> runner = WorkflowRunner(PlaywrightDriver(page), semantic_executor=agent)
    >>> result = await runner.run("login.json", {"EMAIL": "a@b.com"})
    >>> result.success
    True
"""

import asyncio
import logging
from typing import Mapping, Optional, TYPE_CHECKING

from intent_replay.config import Settings, get_settings
from intent_replay.engine.step_executor import StepExecutor
from intent_replay.outcome import ExecutionOutcome, RunResult
from intent_replay.spec.loader import SpecSource, load_intent_spec
from intent_replay.templating import Substitutor

if TYPE_CHECKING:
    from intent_replay.interfaces.driver import IBrowserDriver
    from intent_replay.interfaces.semantic import IScreenshotComparator, ISemanticExecutor

logger = logging.getLogger(__name__)


class WorkflowRunner:
    """
    Run Intent Specs against one page.

    A runner holds no per-run state; concurrent runs need separate drivers
    (pages) but may share everything else.
    """

    def __init__(
        self,
        driver: "IBrowserDriver",
        semantic_executor: Optional["ISemanticExecutor"] = None,
        settings: Optional[Settings] = None,
        comparator: Optional["IScreenshotComparator"] = None,
    ):
        self._driver = driver
        self._semantic = semantic_executor
        self._settings = settings or get_settings()
        self._comparator = comparator

    def _executor(self) -> StepExecutor:
        return StepExecutor(self._driver, self._semantic, self._settings, self._comparator)

    async def run(
        self,
        spec: SpecSource,
        variables: Optional[Mapping[str, str]] = None,
        cancel: Optional[asyncio.Event] = None,
    ) -> RunResult:
        """
        Replay a workflow.

        Args:
            spec: An IntentSpec, or anything ``load_intent_spec`` accepts
            variables: Values for the spec's declared ``params``
            cancel: Set it to stop the run before the next step

        Returns:
            RunResult with one outcome per attempted step

        Raises:
            IntentSpecError: The spec is malformed
            TemplatingError: A declared param has no value; no step has run
        """
        intent = load_intent_spec(spec)
        substitutor = Substitutor(intent.params)
        substitutor.check_resolved(variables or {})
        substitute = substitutor.bind(variables or {})

        executor = self._executor()
        result = RunResult(spec_name=intent.name)
        preferences = intent.preferences
        logger.info(f"Running '{intent.name}' ({len(intent.steps)} steps)")

        if intent.url:
            if cancel is not None and cancel.is_set():
                result.outcomes.append(ExecutionOutcome.cancelled())
                return result
            opened = await executor.open_start_url(substitute(intent.url))
            if not opened.success:
                logger.error(f"Could not open {intent.url}: {opened.error}")
                result.outcomes.append(opened)
                return result

        for index, step in enumerate(intent.steps):
            if cancel is not None and cancel.is_set():
                logger.warning(f"Run '{intent.name}' cancelled before step {index + 1}")
                result.outcomes.append(ExecutionOutcome.cancelled())
                break

            if index and preferences.step_delay_ms:
                await asyncio.sleep(preferences.step_delay_ms / 1000)

            logger.info(f"Step {index + 1}/{len(intent.steps)}: {step.name}")
            outcome = await executor.execute(step, substitute, preferences.step_timeout_ms)
            result.outcomes.append(outcome)

            if outcome.success:
                continue
            if outcome.non_fatal:
                logger.warning(f"Step '{step.name}' failed, continuing (skipOnError): {outcome.error}")
                continue
            logger.error(f"Run '{intent.name}' stopped at step '{step.name}': {outcome.error}")
            break

        stats = result.stats
        logger.info(
            f"Run '{intent.name}' finished: success={result.success}, "
            f"snippet={stats.snippet_success}/{stats.snippet_success + stats.snippet_failure}, "
            f"ai={stats.ai_success}/{stats.ai_success + stats.ai_failure}, "
            f"skipped={stats.skipped_steps}"
        )
        return result
