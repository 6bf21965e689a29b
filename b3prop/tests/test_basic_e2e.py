"""Basic smoke tests for b3prop.

Quick sanity checks that the public surface imports and works end to end.
"""

import pytest

import b3prop


def test_version_exposed():
    """Smoke test: version is accessible."""
    assert hasattr(b3prop, '__version__')
    assert isinstance(b3prop.__version__, str)
    assert len(b3prop.__version__.split('.')) >= 2


def test_top_level_inject_extract():
    """Smoke test: a context survives a trip through a header dict."""
    context = b3prop.SpanContext(
        trace_id=b3prop.parse_id("80f198ee56343ba864fe8b2a57d3eff7"),
        span_id=b3prop.parse_id("e457b5a2e4d86bd1"),
        sampled=True,
        baggage={"request": "42"},
    )
    headers = {}
    b3prop.inject(context, headers)
    assert headers["X-B3-TraceId"] == "80f198ee56343ba864fe8b2a57d3eff7"
    assert b3prop.extract(headers) == context


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
