"""
Test RPC Client with Mocks

Tests for RPC client behavior with mocked responses.
"""

import sys
import base64
from pathlib import Path
from unittest.mock import Mock, patch

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))


ENDPOINT = "https://api.mainnet-beta.solana.com"


def _response(payload, status_code=200):
    mock_response = Mock()
    mock_response.status_code = status_code
    mock_response.json.return_value = payload
    mock_response.raise_for_status = Mock()
    return mock_response


def test_rpc_config_defaults():
    """Test RpcClientConfig default values from global config"""
    from fixed_ratio_trading.infra.rpc import RpcClientConfig

    print("Testing RpcClientConfig defaults...")

    config = RpcClientConfig()

    assert config.timeout_seconds > 0, "Should have positive timeout"
    assert config.commitment in ("processed", "confirmed", "finalized"), "Invalid commitment"

    print("  RpcClientConfig defaults: PASSED")


def test_rpc_config_override():
    """Test RpcClientConfig with overrides"""
    from fixed_ratio_trading.infra.rpc import RpcClientConfig

    print("Testing RpcClientConfig override...")

    config = RpcClientConfig(timeout_seconds=60.0, commitment="finalized")

    assert config.timeout_seconds == 60.0, "Should use override timeout"
    assert config.commitment == "finalized", "Should use override commitment"

    print("  RpcClientConfig override: PASSED")


def test_rpc_client_init():
    """Test RpcClient initialization"""
    from fixed_ratio_trading.infra.rpc import RpcClient
    from fixed_ratio_trading.errors import ConfigurationError, ErrorCode

    print("Testing RpcClient init...")

    client = RpcClient(ENDPOINT)
    assert client.endpoint == ENDPOINT

    try:
        RpcClient("")
        assert False, "Should raise for empty endpoint"
    except ConfigurationError as e:
        assert e.code == ErrorCode.CONFIG_MISSING

    print("  RpcClient init: PASSED")


def test_rpc_call_success():
    """Test successful RPC call"""
    import httpx
    from fixed_ratio_trading.infra.rpc import RpcClient

    print("Testing RPC call success...")

    mock_response = _response({
        "jsonrpc": "2.0",
        "id": 1,
        "result": {"value": {"blockhash": "test_blockhash", "lastValidBlockHeight": 12345}},
    })

    with patch.object(httpx.Client, 'post', return_value=mock_response) as mock_post:
        client = RpcClient(ENDPOINT)
        value = client.get_latest_blockhash()

        assert value["blockhash"] == "test_blockhash"
        body = mock_post.call_args.kwargs["json"]
        assert body["method"] == "getLatestBlockhash"
        assert body["params"] == [{"commitment": client.commitment}]

        client.close()

    print("  RPC call success: PASSED")


def test_rpc_call_error():
    """Test JSON-RPC error response surfaces code and data"""
    import httpx
    from fixed_ratio_trading.infra.rpc import RpcClient
    from fixed_ratio_trading.errors import RpcError, ErrorCode

    print("Testing RPC call error...")

    mock_response = _response({
        "jsonrpc": "2.0",
        "id": 1,
        "error": {"code": -32602, "message": "Invalid params", "data": "bad encoding"},
    })

    with patch.object(httpx.Client, 'post', return_value=mock_response):
        client = RpcClient(ENDPOINT)
        try:
            client.call("getAccountInfo", ["invalid"])
            assert False, "Should raise RpcError"
        except RpcError as e:
            assert e.code == ErrorCode.RPC_INVALID_RESPONSE
            assert "Invalid params" in e.message
            assert e.details["rpc_error_code"] == -32602
            assert e.details["rpc_error_data"] == "bad encoding"
            assert e.endpoint == ENDPOINT

    print("  RPC call error: PASSED")


def test_rpc_rate_limited():
    """Test 429 raises without retrying"""
    import httpx
    from fixed_ratio_trading.infra.rpc import RpcClient
    from fixed_ratio_trading.errors import RpcError, ErrorCode

    print("Testing RPC rate limit...")

    with patch.object(httpx.Client, 'post', return_value=_response({}, status_code=429)) as mock_post:
        client = RpcClient(ENDPOINT)
        try:
            client.call("getSlot", [])
            assert False, "Should raise RpcError"
        except RpcError as e:
            assert e.code == ErrorCode.RPC_RATE_LIMITED
            assert e.should_retry
        assert mock_post.call_count == 1

    print("  RPC rate limit: PASSED")


def test_rpc_timeout_single_attempt():
    """Test timeout raises on the first failure"""
    import httpx
    from fixed_ratio_trading.infra.rpc import RpcClient, RpcClientConfig
    from fixed_ratio_trading.errors import RpcError, ErrorCode

    print("Testing RPC timeout...")

    with patch.object(httpx.Client, 'post', side_effect=httpx.ReadTimeout("timed out")) as mock_post:
        client = RpcClient(ENDPOINT, config=RpcClientConfig(timeout_seconds=5.0))
        try:
            client.call("getSlot", [])
            assert False, "Should raise RpcError"
        except RpcError as e:
            assert e.code == ErrorCode.RPC_TIMEOUT
            assert "5.0" in e.message
        assert mock_post.call_count == 1

    print("  RPC timeout: PASSED")


def test_rpc_connection_error():
    """Test connection failure keeps the original error"""
    import httpx
    from fixed_ratio_trading.infra.rpc import RpcClient
    from fixed_ratio_trading.errors import RpcError, ErrorCode

    print("Testing RPC connection error...")

    with patch.object(httpx.Client, 'post', side_effect=httpx.ConnectError("refused")):
        client = RpcClient(ENDPOINT)
        try:
            client.call("getSlot", [])
            assert False, "Should raise RpcError"
        except RpcError as e:
            assert e.code == ErrorCode.RPC_CONNECTION_FAILED
            assert isinstance(e.original_error, httpx.ConnectError)

    print("  RPC connection error: PASSED")


def test_rpc_http_status_error():
    """Test non-2xx status surfaces the status code"""
    import httpx
    from fixed_ratio_trading.infra.rpc import RpcClient
    from fixed_ratio_trading.errors import RpcError, ErrorCode

    print("Testing RPC HTTP status error...")

    request = httpx.Request("POST", ENDPOINT)
    error_response = httpx.Response(500, request=request)
    mock_response = _response({}, status_code=500)
    mock_response.raise_for_status = Mock(
        side_effect=httpx.HTTPStatusError("server error", request=request, response=error_response)
    )

    with patch.object(httpx.Client, 'post', return_value=mock_response):
        client = RpcClient(ENDPOINT)
        try:
            client.call("getSlot", [])
            assert False, "Should raise RpcError"
        except RpcError as e:
            assert e.code == ErrorCode.RPC_INVALID_RESPONSE
            assert e.details["status_code"] == 500

    print("  RPC HTTP status error: PASSED")


def test_rpc_invalid_json():
    """Test an unparsable body raises RpcError"""
    import httpx
    from fixed_ratio_trading.infra.rpc import RpcClient
    from fixed_ratio_trading.errors import RpcError

    print("Testing RPC invalid JSON...")

    mock_response = _response(None)
    mock_response.json.side_effect = ValueError("Expecting value")

    with patch.object(httpx.Client, 'post', return_value=mock_response):
        client = RpcClient(ENDPOINT)
        try:
            client.call("getSlot", [])
            assert False, "Should raise RpcError"
        except RpcError as e:
            assert "Invalid JSON" in e.message

    print("  RPC invalid JSON: PASSED")


def test_get_account_info_not_found():
    """Test missing account returns None"""
    import httpx
    from solders.pubkey import Pubkey
    from fixed_ratio_trading.infra.rpc import RpcClient

    print("Testing get_account_info not found...")

    mock_response = _response({"jsonrpc": "2.0", "id": 1, "result": {"context": {"slot": 1}, "value": None}})

    with patch.object(httpx.Client, 'post', return_value=mock_response) as mock_post:
        client = RpcClient(ENDPOINT)
        address = Pubkey.from_bytes(bytes([3]) * 32)
        assert client.get_account_info(address) is None

        params = mock_post.call_args.kwargs["json"]["params"]
        assert params[0] == str(address)
        assert params[1]["encoding"] == "base64"

    print("  get_account_info not found: PASSED")


def test_simulate_transaction_params():
    """Test simulation request encoding and flags"""
    import httpx
    from fixed_ratio_trading.infra.rpc import RpcClient

    print("Testing simulate_transaction params...")

    mock_response = _response({
        "jsonrpc": "2.0",
        "id": 1,
        "result": {"context": {"slot": 1}, "value": {"err": None, "logs": ["Program log: ok"]}},
    })

    with patch.object(httpx.Client, 'post', return_value=mock_response) as mock_post:
        client = RpcClient(ENDPOINT)
        raw = client.simulate_transaction(b"\x01\x02\x03")

        assert raw["value"]["logs"] == ["Program log: ok"]
        body = mock_post.call_args.kwargs["json"]
        assert body["method"] == "simulateTransaction"
        tx_data, options = body["params"]
        assert base64.b64decode(tx_data) == b"\x01\x02\x03"
        assert options["encoding"] == "base64"
        assert options["sigVerify"] is False
        assert options["replaceRecentBlockhash"] is True

    print("  simulate_transaction params: PASSED")


def test_request_ids_increment():
    """Test each call gets a fresh JSON-RPC id"""
    import httpx
    from fixed_ratio_trading.infra.rpc import RpcClient

    print("Testing request ids...")

    with patch.object(httpx.Client, 'post', return_value=_response({"result": 1})) as mock_post:
        client = RpcClient(ENDPOINT)
        client.call("getSlot", [])
        client.call("getSlot", [])
        ids = [c.kwargs["json"]["id"] for c in mock_post.call_args_list]
        assert ids[0] != ids[1]

    print("  Request ids: PASSED")


def main():
    """Run all tests"""
    print("=" * 60)
    print("RPC Mock Tests")
    print("=" * 60)

    tests = [
        test_rpc_config_defaults,
        test_rpc_config_override,
        test_rpc_client_init,
        test_rpc_call_success,
        test_rpc_call_error,
        test_rpc_rate_limited,
        test_rpc_timeout_single_attempt,
        test_rpc_connection_error,
        test_rpc_http_status_error,
        test_rpc_invalid_json,
        test_get_account_info_not_found,
        test_simulate_transaction_params,
        test_request_ids_increment,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"  FAILED: {e}")
            import traceback
            traceback.print_exc()
            failed += 1

    print("=" * 60)
    print(f"Results: {passed} passed, {failed} failed")
    print("=" * 60)

    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
