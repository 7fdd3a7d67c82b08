"""Error handling middleware for action channels."""

from middleware import Middleware, ActionContext
from error_handling import ErrorHandler


class ErrorHandlingMiddleware(Middleware):
    """
    Records channel failures in an ErrorHandler.

    The channel re-raises the error after this hook runs; the suggested
    recovery strategy is stored on the context for whoever catches it.

    Example:
        >>> errors = ErrorHandlingMiddleware()
        >>> channel.use(errors)
        >>> errors.get_error_summary()
    """

    def __init__(self, error_handler: ErrorHandler = None, verbose: bool = False):
        self.error_handler = error_handler or ErrorHandler()
        self.verbose = verbose

    def on_error(self, context: ActionContext, error: Exception) -> None:
        strategy = self.error_handler.handle_error(
            error,
            {
                'action_type': context.action_type,
                'action_data': context.action_data
            }
        )
        context.metadata['recovery_strategy'] = strategy

        if self.verbose:
            error_context = self.error_handler.errors[-1]
            print(f"\n❌ Error: {error_context.error_type}")
            print(f"   Message: {error_context.message}")
            print(f"   Strategy: {strategy.value}")

    def get_error_summary(self):
        """Get summary of all errors encountered."""
        return self.error_handler.get_error_summary()

    def clear_errors(self):
        """Clear error history."""
        self.error_handler.clear_errors()
