from expense_api.core.config import Settings, settings


class _NoopLimiter:
    enabled = False

    def limit(self, *_args, **_kwargs):
        def decorator(func):
            return func

        return decorator


def build_limiter(config: Settings):
    """Per-client limiter keyed by remote address; a no-op under ``ENV=test``."""
    if config.env.lower() == "test":
        return _NoopLimiter()

    from slowapi import Limiter
    from slowapi.util import get_remote_address

    return Limiter(
        key_func=get_remote_address,
        default_limits=[config.rate_limit_global],
        headers_enabled=False,
    )


limiter = build_limiter(settings)
