import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def moderation_bed():
    from moderation.domain import moderation

    bed = DomainFixture(moderation)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(moderation_bed):
    from moderation.channel import reset_channels

    with moderation_bed.domain_context():
        yield

        from protean import current_domain

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()

    reset_channels()


@pytest.fixture()
def notifier():
    from moderation.channel import NOTIFIER, get_channel

    return get_channel(NOTIFIER)


@pytest.fixture()
def emailer():
    from moderation.channel import EMAIL, get_channel

    return get_channel(EMAIL)


@pytest.fixture()
def directory():
    from moderation.channel import DIRECTORY, get_channel

    return get_channel(DIRECTORY)
