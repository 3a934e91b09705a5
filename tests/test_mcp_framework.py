from mcp_framework import _describe_body


def test_describe_jsonrpc_body():
    body = b'{"jsonrpc": "2.0", "method": "tools/call", "params": {"name": "x", "arguments": {}}}'
    assert _describe_body(body) == {"jsonrpc_method": "tools/call", "param_keys": ["arguments", "name"]}


def test_describe_validation_body():
    assert _describe_body(b'{"irdNumber": "49091850"}') == {"body_keys": ["irdNumber"]}


def test_describe_non_object_body():
    assert _describe_body(b'["49091850"]') == {"body_type": "list"}


def test_describe_malformed_body():
    assert "body_parse_error" in _describe_body(b"not json")
