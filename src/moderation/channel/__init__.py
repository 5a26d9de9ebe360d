"""Channel adapter registry — the notification, email and identity collaborators.

Provides singleton access to channel adapters. Fake adapters are used by
default; deployments install real adapters with ``register_channel`` at
startup.
"""

NOTIFIER = "Notifier"
EMAIL = "Email"
DIRECTORY = "Directory"

_channel_instances: dict[str, object] = {}


def get_channel(channel_type: str):
    """Return the configured channel adapter (singleton per channel type).

    Args:
        channel_type: One of ``NOTIFIER``, ``EMAIL``, ``DIRECTORY``
    """
    if channel_type not in _channel_instances:
        if channel_type == NOTIFIER:
            from moderation.channel.fake_notifier import FakeNotifierAdapter

            _channel_instances[channel_type] = FakeNotifierAdapter()
        elif channel_type == EMAIL:
            from moderation.channel.fake_email import FakeEmailAdapter

            _channel_instances[channel_type] = FakeEmailAdapter()
        elif channel_type == DIRECTORY:
            from moderation.channel.fake_directory import InMemoryUserDirectory

            _channel_instances[channel_type] = InMemoryUserDirectory()
        else:
            raise ValueError(f"Unknown channel type: {channel_type}")

    return _channel_instances[channel_type]


def register_channel(channel_type: str, adapter) -> None:
    """Install a specific adapter for a channel type."""
    if channel_type not in (NOTIFIER, EMAIL, DIRECTORY):
        raise ValueError(f"Unknown channel type: {channel_type}")
    _channel_instances[channel_type] = adapter


def reset_channels():
    """Reset all channel singletons (useful for testing)."""
    _channel_instances.clear()
