"""
Tests for clientmock Mock Entry

Tests the low-level mock entry:
- Exact and partial matching rules
- Header subset semantics
- Lazy response evaluation and call recording
"""

import re

import pytest

from clientmock.client.request import Request
from clientmock.mock.entry import MockRequest
from clientmock.mock.matchers import m

BASE = 'https://api.example.com'


@pytest.fixture
def users_mock():
    """GET /users mock with a JSON body and header constraint."""
    return MockRequest(
        1,
        method='POST',
        url=f'{BASE}/users',
        body={'name': 'Jane'},
        headers={'Content-Type': 'application/json'},
        response={'status': 201, 'body': {'id': 1}}
    )


class TestMockRequestMatching:
    """Test exact and partial matching."""

    def test_exact_match(self, users_mock):
        """Test request satisfying every field."""
        request = Request('post', f'{BASE}/users', {'name': 'Jane'}, {'content-type': 'application/json'})

        assert users_mock.is_exact_match(request) is True

    def test_method_is_case_insensitive(self, users_mock):
        """Test method comparison ignores case."""
        request = Request('POST', f'{BASE}/users', {'name': 'Jane'}, {'Content-Type': 'application/json'})

        assert users_mock.is_exact_match(request) is True

    def test_extra_request_headers_allowed(self, users_mock):
        """Test mock headers are a subset constraint."""
        request = Request(
            'post', f'{BASE}/users', {'name': 'Jane'},
            {'content-type': 'application/json', 'x-request-id': 'abc'}
        )

        assert users_mock.is_exact_match(request) is True

    def test_missing_header_is_partial(self, users_mock):
        """Test missing mock header breaks the exact match only."""
        request = Request('post', f'{BASE}/users', {'name': 'Jane'})

        assert users_mock.is_exact_match(request) is False
        assert users_mock.is_partial_match(request) is True

    def test_body_mismatch_is_partial(self, users_mock):
        """Test different body breaks the exact match only."""
        request = Request('post', f'{BASE}/users', {'name': 'John'}, {'content-type': 'application/json'})

        assert users_mock.is_exact_match(request) is False
        assert users_mock.is_partial_match(request) is True

    def test_json_string_body_matches_mapping(self, users_mock):
        """Test JSON text body compares structurally."""
        request = Request('post', f'{BASE}/users', '{"name": "Jane"}', {'content-type': 'application/json'})

        assert users_mock.is_exact_match(request) is True

    def test_absent_body_is_unconstrained(self):
        """Test mock without body accepts any body."""
        mock = MockRequest(1, method='post', url=f'{BASE}/users')

        assert mock.is_exact_match(Request('post', f'{BASE}/users', {'anything': True})) is True
        assert mock.is_exact_match(Request('post', f'{BASE}/users')) is True

    def test_url_query_order_ignored(self):
        """Test literal urls compare with sorted query params."""
        mock = MockRequest(1, url=f'{BASE}/users?page=2&limit=10')

        assert mock.is_exact_match(Request('get', f'{BASE}/users?limit=10&page=2')) is True

    def test_url_matcher(self):
        """Test url predicate."""
        mock = MockRequest(1, url=m.string_matching(re.compile(r'/users/\d+$')))

        assert mock.is_exact_match(Request('get', f'{BASE}/users/7')) is True
        assert mock.is_partial_match(Request('get', f'{BASE}/orders/7')) is False

    def test_different_method_no_match(self, users_mock):
        """Test method mismatch fails even the partial match."""
        request = Request('get', f'{BASE}/users')

        assert users_mock.is_partial_match(request) is False

    def test_header_matchers(self):
        """Test header predicates receive the header value."""
        mock = MockRequest(
            1,
            url=f'{BASE}/users',
            headers={'Authorization': m.string_containing('Bearer'), 'X-Trace': m.uuid4()}
        )
        request = Request('get', f'{BASE}/users', headers={
            'authorization': 'Bearer abc',
            'x-trace': '123e4567-e89b-42d3-a456-426614174000'
        })

        assert mock.is_exact_match(request) is True

    def test_url_required(self):
        """Test url is mandatory."""
        with pytest.raises(ValueError):
            MockRequest(1, method='get')


class TestMockRequestCall:
    """Test response production."""

    def test_literal_response(self, users_mock):
        """Test literal response and call recording."""
        request = Request('post', f'{BASE}/users', {'name': 'Jane'}, {'content-type': 'application/json'})

        response = users_mock.call(request)

        assert response.status == 201
        assert response.body == {'id': 1}
        assert response.request is request
        assert users_mock.calls == [request]

    def test_callable_response_is_lazy(self):
        """Test response function evaluated with the matched request."""
        seen = []

        def handler(request):
            seen.append(request)
            return {'status': 200, 'body': {'echo': request.body()}}

        mock = MockRequest(1, method='post', url=f'{BASE}/echo', response=handler)
        assert seen == []

        request = Request('post', f'{BASE}/echo', {'x': 1})
        response = mock.call(request)

        assert seen == [request]
        assert response.body == {'echo': {'x': 1}}

    def test_default_response(self):
        """Test empty response defaults to 200."""
        mock = MockRequest(1, url=f'{BASE}/ping')

        response = mock.call(Request('get', f'{BASE}/ping'))

        assert response.status == 200
        assert response.body is None
        assert response.headers == {}

    def test_matching_does_not_mutate_pattern(self, users_mock):
        """Test pattern fields unchanged after calls."""
        before = users_mock.describe()

        users_mock.call(Request('post', f'{BASE}/users', {'name': 'Jane'}))

        assert users_mock.describe() == before

    def test_assert_object(self, users_mock):
        """Test assertion handle."""
        handle = users_mock.assert_object()
        assert handle.calls_count() == 0
        assert handle.most_recent_call() is None

        first = Request('post', f'{BASE}/users', {'name': 'Jane'})
        second = Request('post', f'{BASE}/users', {'name': 'Jane'})
        users_mock.call(first)
        users_mock.call(second)

        assert handle.calls_count() == 2
        assert handle.calls() == [first, second]
        assert handle.most_recent_call() is second
        assert handle.id == 1
