"""Metrics collection middleware for action channels."""

import time
from middleware import Middleware, ActionContext
from models import Ack
from typing import Any, Dict


class MetricsMiddleware(Middleware):
    """
    Collect channel metrics.

    Tracks:
    - Number of intents forwarded, by kind
    - Number of errors
    - Time spent forwarding

    Example:
        >>> metrics = MetricsMiddleware()
        >>> channel.use(metrics)
        >>> # ... fill some fields ...
        >>> print(metrics.get_metrics())
    """

    def __init__(self):
        """Initialize metrics middleware."""
        self.metrics = {
            'actions': 0,
            'clicks': 0,
            'types': 0,
            'errors': 0,
            'total_time': 0.0,
            'action_times': []
        }

    def before_action(self, context: ActionContext) -> ActionContext:
        """Start timing the intent."""
        context.metadata['start_time'] = time.time()
        return context

    def after_action(self, context: ActionContext, result: Ack) -> Ack:
        """Record metrics after the intent was forwarded."""
        if 'start_time' in context.metadata:
            elapsed = time.time() - context.metadata['start_time']
            self.metrics['total_time'] += elapsed
            self.metrics['action_times'].append(elapsed)

        self.metrics['actions'] += 1
        if context.action_type == 'click':
            self.metrics['clicks'] += 1
        elif context.action_type == 'type':
            self.metrics['types'] += 1

        return result

    def on_error(self, context: ActionContext, error: Exception) -> None:
        """Count errors."""
        self.metrics['errors'] += 1

    def get_metrics(self) -> Dict[str, Any]:
        """
        Get collected metrics.

        Returns:
            Dictionary of metrics
        """
        avg_time = (
            self.metrics['total_time'] / self.metrics['actions']
            if self.metrics['actions'] > 0
            else 0
        )

        return {
            **self.metrics,
            'average_action_time': avg_time
        }

    def print_summary(self) -> None:
        """Print metrics summary."""
        metrics = self.get_metrics()
        print("\n" + "=" * 60)
        print("📊 CHANNEL METRICS")
        print("=" * 60)
        print(f"Intents: {metrics['actions']} (clicks: {metrics['clicks']}, types: {metrics['types']})")
        print(f"Errors: {metrics['errors']}")
        print(f"Total Time: {metrics['total_time']:.2f}s")
        print(f"Average Intent Time: {metrics['average_action_time']:.3f}s")
        print("=" * 60 + "\n")
