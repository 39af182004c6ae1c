"""Dagster ops for processing job application reminders."""

from dagster import Backoff, Failure, Jitter, OpExecutionContext, RetryPolicy, op
from src.reminders.processor import ProcessingStats, get_reminder_processor

# Maximum number of error messages to include in the run log summary
MAX_ERRORS_IN_SUMMARY = 5

# Retry policy for reminder ops
REMINDER_RETRY_POLICY = RetryPolicy(
    max_retries=1,
    delay=30,
    backoff=Backoff.EXPONENTIAL,
    jitter=Jitter.FULL,
)


def _log_errors(context: OpExecutionContext, errors: list[str]) -> None:
    """Log a summary of per-reminder errors from a pass.

    :param context: Dagster execution context.
    :param errors: Error messages from the pass.
    """
    if not errors:
        return

    summary = "\n".join(f"- {err}" for err in errors[:MAX_ERRORS_IN_SUMMARY])
    if len(errors) > MAX_ERRORS_IN_SUMMARY:
        summary += f"\n... and {len(errors) - MAX_ERRORS_IN_SUMMARY} more"
    context.log.warning(f"Reminder processing errors ({len(errors)}):\n{summary}")


@op(
    name="process_reminders",
    retry_policy=REMINDER_RETRY_POLICY,
    description="Send due job application reminders and mark them as sent.",
)
def process_reminders_op(context: OpExecutionContext) -> ProcessingStats:
    """Run one reminder processing pass.

    Failed reminders stay unsent and are retried by the next scheduled run,
    so per-reminder failures do not fail the op. A pass that could not load
    the due set fails the op so the retry policy applies.

    :param context: Dagster execution context.
    :returns: Stats for the pass.
    :raises Failure: If the pass was aborted.
    """
    context.log.info("Starting reminder processing")
    stats = get_reminder_processor().process_due_reminders()

    if stats.skipped:
        context.log.info("Reminder processing skipped: a pass is already running")
        return stats

    context.log.info(
        f"Reminder processing complete: due={stats.due}, sent={stats.sent}, "
        f"failed={stats.failed}"
    )
    _log_errors(context, stats.errors)

    if stats.aborted:
        raise Failure(
            description="Reminder processing aborted",
            metadata={"errors": "\n".join(stats.errors)},
        )

    return stats
