"""
Tests for clientmock Mock Resource

Tests client-bound mocks and middleware replay:
- Fluent builder against the client's resource table
- One-time, idempotent middleware replay
- Concurrent replay fan-out in the async lookup
- Call history across replay
"""

import asyncio

import pytest

from clientmock.client.client import Client
from clientmock.client.configs import Configs
from clientmock.client.gateway.base import Gateway
from clientmock.client.middleware import Middleware
from clientmock.client.request import Request
from clientmock.mock.errors import NoExactMatchButPartial
from clientmock.mock.registry import MockRegistry

HOST = 'https://api.example.com'

RESOURCES = {
    'User': {
        'all': {'path': '/users'},
        'byId': {'path': '/users/{id}'},
        'create': {'method': 'post', 'path': '/users'},
    }
}


class AuthMiddleware(Middleware):
    """Attaches a bearer token and counts invocations."""

    def __init__(self, token='t0k3n'):
        self.token = token
        self.invocations = 0

    def prepare_request(self, request):
        self.invocations += 1
        return request.enhance(headers={'Authorization': f'Bearer {self.token}'})


class AsyncAuthMiddleware(AuthMiddleware):
    """Async variant of AuthMiddleware."""

    async def prepare_request(self, request):
        await asyncio.sleep(0)
        return super().prepare_request(request)


class BarrierMiddleware(Middleware):
    """Blocks until ``expected`` hooks are running at the same time."""

    def __init__(self, expected):
        self.expected = expected
        self.started = 0
        self.event = None

    async def prepare_request(self, request):
        if self.event is None:
            self.event = asyncio.Event()
        self.started += 1
        if self.started >= self.expected:
            self.event.set()
        await self.event.wait()
        return request


@pytest.fixture
def configs():
    """Isolated client configuration."""
    return Configs(gateway=Gateway())


@pytest.fixture
def registry(configs):
    registry = MockRegistry(configs)
    registry.install()
    yield registry
    registry.uninstall()


def make_client(configs, *middleware):
    return Client(HOST, RESOURCES, middleware=middleware, configs=configs)


class TestMockResourceBuilder:
    """Test the fluent builder."""

    def test_sync_call_through_client(self, configs, registry):
        """Test client-bound mock answers a synchronous client call."""
        client = make_client(configs)
        mock = (registry.mock_client(client)
                .resource('User')
                .method('byId')
                .with_(params={'id': 7})
                .status(200)
                .headers({'X-Source': 'mock'})
                .response({'id': 7}))

        response = client.call('User', 'byId', params={'id': 7})

        assert response.status == 200
        assert response.body == {'id': 7}
        assert response.headers == {'x-source': 'mock'}
        assert mock.calls_count() == 1
        assert mock.most_recent_call().url() == f'{HOST}/users/7'

    def test_body_constraint(self, configs, registry):
        """Test mock body constraint from the builder."""
        client = make_client(configs)
        registry.mock_client(client).resource('User').method('create').with_(body={'name': 'Jane'}).status(201)

        assert client.call('User', 'create', body={'name': 'Jane'}).status == 201

        with pytest.raises(NoExactMatchButPartial):
            client.call('User', 'create', body={'name': 'John'})

    def test_response_handler(self, configs, registry):
        """Test callable response body evaluated per request."""
        client = make_client(configs)
        registry.mock_client(client).resource('User').method('all').response(
            lambda request: {'url': request.url()}
        )

        assert client.call('User', 'all').body == {'url': f'{HOST}/users'}

    def test_missing_resource(self, configs, registry):
        """Test unconfigured mock fails when resolved."""
        registry.mock_client(make_client(configs))

        with pytest.raises(ValueError):
            registry.unused_mocks()

    def test_unused_until_called(self, configs, registry):
        """Test client-bound mock counts as unused."""
        client = make_client(configs)
        registry.mock_client(client).resource('User').method('all')

        assert registry.unused_mocks() == 1
        client.call('User', 'all')
        assert registry.unused_mocks() == 0


class TestMiddlewareReplay:
    """Test execute_middleware_stack and the async lookup."""

    def test_pending_until_replayed(self, configs, registry):
        """Test flag cleared permanently after the first replay."""
        middleware = AuthMiddleware()
        mock = registry.mock_client(make_client(configs, middleware)).resource('User').method('all')

        assert mock.pending_middleware_execution is True

        asyncio.run(mock.execute_middleware_stack())
        asyncio.run(mock.execute_middleware_stack())

        assert mock.pending_middleware_execution is False
        assert middleware.invocations == 1

    def test_replayed_headers_become_constraints(self, configs, registry):
        """Test injected header is part of the matched pattern after replay."""
        registry.mock_client(make_client(configs, AuthMiddleware())).resource('User').method('all')

        async def run():
            return await registry.lookup_response_async(Request('get', f'{HOST}/users'))

        with pytest.raises(NoExactMatchButPartial) as exc_info:
            asyncio.run(run())

        assert 'authorization=Bearer%20t0k3n' in str(exc_info.value)

    def test_async_client_request(self, configs, registry):
        """Test async client path with async middleware."""
        middleware = AsyncAuthMiddleware()
        client = make_client(configs, middleware)
        mock = registry.mock_client(client).resource('User').method('all').response([{'id': 1}])

        response = asyncio.run(client.request('User', 'all'))

        assert response.body == [{'id': 1}]
        assert mock.most_recent_call().header('authorization') == 'Bearer t0k3n'
        # Once for the replay, once for the real request
        assert middleware.invocations == 2

    def test_async_lookup_does_not_rerun_replays(self, configs, registry):
        """Test second async lookup skips cleared entries."""
        middleware = AuthMiddleware()
        client = make_client(configs, middleware)
        registry.mock_client(client).resource('User').method('all')
        request = Request('get', f'{HOST}/users', headers={'Authorization': 'Bearer t0k3n'})

        asyncio.run(registry.lookup_response_async(request))
        asyncio.run(registry.lookup_response_async(request))

        assert middleware.invocations == 1
        assert registry.store.pending_middleware() == []

    def test_replays_launch_concurrently(self, configs, registry):
        """Test every pending replay runs at the same time before matching."""
        middleware = BarrierMiddleware(expected=3)
        client = make_client(configs, middleware)
        for _ in range(3):
            registry.mock_client(client).resource('User').method('all')

        async def run():
            return await asyncio.wait_for(
                registry.lookup_response_async(Request('get', f'{HOST}/users')),
                timeout=2
            )

        response = asyncio.run(run())

        assert response.status == 200
        assert middleware.started == 3
        assert registry.store.pending_middleware() == []

    def test_last_registration_wins_after_replay(self, configs, registry):
        """Test deterministic winner once replays settle."""
        client = make_client(configs, AsyncAuthMiddleware())
        first = registry.mock_client(client).resource('User').method('all').response('first')
        second = registry.mock_client(client).resource('User').method('all').response('second')

        response = asyncio.run(client.request('User', 'all'))

        assert response.body == 'second'
        assert first.calls_count() == 0
        assert second.calls_count() == 1

    def test_calls_survive_replay(self, configs, registry):
        """Test calls recorded before the replay are kept."""
        client = make_client(configs, AuthMiddleware())
        mock = registry.mock_client(client).resource('User').method('all')

        client.call('User', 'all')
        asyncio.run(client.request('User', 'all'))

        assert mock.calls_count() == 2
