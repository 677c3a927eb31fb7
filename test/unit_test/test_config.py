"""
Test Configuration

Tests for environment-driven settings and logging setup.
"""

import os
import sys
import logging
import tempfile
from pathlib import Path
from unittest.mock import patch

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))


def test_env_overrides():
    """Test settings are read from the environment"""
    from fixed_ratio_trading.config import Config

    print("Testing env overrides...")

    env = {
        "SOLANA_RPC_URL": "https://rpc.example.com",
        "RPC_TIMEOUT_SECONDS": "12.5",
        "RPC_COMMITMENT": "finalized",
        "FRT_PROGRAM_ID": "11111111111111111111111111111111",
        "FRT_DEFAULT_SLIPPAGE_PERCENT": "3",
    }
    with patch.dict(os.environ, env):
        cfg = Config()

    assert cfg.rpc.url == "https://rpc.example.com"
    assert cfg.rpc.timeout_seconds == 12.5
    assert cfg.rpc.commitment == "finalized"
    assert cfg.program.program_id == "11111111111111111111111111111111"
    assert cfg.trading.default_slippage_percent == 3

    print("  Env overrides: PASSED")


def test_invalid_values_fall_back():
    """Test unparsable numbers fall back to defaults"""
    from fixed_ratio_trading.config import Config

    print("Testing invalid env values...")

    with patch.dict(os.environ, {"RPC_TIMEOUT_SECONDS": "soon", "FRT_DEFAULT_SLIPPAGE_PERCENT": "one"}):
        cfg = Config()

    assert cfg.rpc.timeout_seconds == 30.0
    assert cfg.trading.default_slippage_percent == 1

    print("  Invalid env values: PASSED")


def test_client_uses_configured_program():
    """Test FRT_PROGRAM_ID reaches the client after reload"""
    from solders.pubkey import Pubkey
    import fixed_ratio_trading.config as config_module
    from fixed_ratio_trading.client import FixedRatioClient

    print("Testing configured program id...")

    program = "11111111111111111111111111111111"
    saved = config_module.config
    try:
        with patch.dict(os.environ, {"FRT_PROGRAM_ID": program}):
            config_module.reload_config()
        assert FixedRatioClient().program_id == Pubkey.from_string(program)
    finally:
        config_module.config = saved

    print("  Configured program id: PASSED")


def test_setup_logging_file():
    """Test file logging writes through the package logger"""
    from fixed_ratio_trading.config import LoggingConfig, setup_logging

    print("Testing setup_logging...")

    with tempfile.TemporaryDirectory() as tmp:
        log_file = Path(tmp) / "nested" / "frt.log"
        logger = setup_logging(
            LoggingConfig(log_file=str(log_file), log_level="DEBUG", console_output=False),
            logger_name="fixed_ratio_trading_test",
        )
        try:
            assert logger.level == logging.DEBUG
            assert len(logger.handlers) == 1

            logging.getLogger("fixed_ratio_trading_test.protocol").debug("derived pool")
            for handler in logger.handlers:
                handler.flush()

            content = log_file.read_text(encoding="utf-8")
            assert "Logging initialized" in content
            assert "derived pool" in content
        finally:
            for handler in logger.handlers[:]:
                handler.close()
                logger.removeHandler(handler)

    print("  setup_logging: PASSED")


def test_log_level_lookup():
    """Test unknown level names fall back to INFO"""
    from fixed_ratio_trading.config import LoggingConfig

    print("Testing log level lookup...")

    assert LoggingConfig(log_file="", log_level="warning").level == logging.WARNING
    assert LoggingConfig(log_file="", log_level="verbose").level == logging.INFO

    print("  Log level lookup: PASSED")


def main():
    """Run all tests"""
    print("=" * 60)
    print("Configuration Tests")
    print("=" * 60)

    tests = [
        test_env_overrides,
        test_invalid_values_fall_back,
        test_client_uses_configured_program,
        test_setup_logging_file,
        test_log_level_lookup,
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
