# =============================================================================
# test_config.py - Machine Configuration Tests
# =============================================================================

import logging

import pytest
from bfc.config import (
    DEFAULT_EOF_VALUE,
    DEFAULT_TAPE_LENGTH,
    RESERVED_SLOTS,
    MachineConfig,
    PointerPolicy,
)
from bfc.errors import ConfigurationError


class TestDefaults:
    """Test the classic-machine defaults."""

    def test_defaults(self):
        config = MachineConfig()
        assert config.tape_length == DEFAULT_TAPE_LENGTH == 30_000
        assert config.eof_value == DEFAULT_EOF_VALUE == 0xFF
        assert config.pointer_policy is PointerPolicy.ERROR

    def test_max_program_length(self):
        """Program length is bounded by the tape minus reserved slots."""
        assert MachineConfig().max_program_length == 30_000 - RESERVED_SLOTS
        assert MachineConfig(tape_length=100).max_program_length == 98


class TestValidation:
    """Test MachineConfig.validate()."""

    def test_valid_config_returned(self):
        config = MachineConfig(tape_length=3, eof_value=0)
        assert config.validate() is config

    @pytest.mark.parametrize("tape_length", [0, 1, RESERVED_SLOTS])
    def test_tape_too_short(self, tape_length):
        with pytest.raises(ConfigurationError):
            MachineConfig(tape_length=tape_length).validate()

    @pytest.mark.parametrize("eof_value", [-1, 256, 1000])
    def test_eof_value_not_a_byte(self, eof_value):
        with pytest.raises(ConfigurationError):
            MachineConfig(eof_value=eof_value).validate()

    def test_policy_must_be_enum(self):
        with pytest.raises(ConfigurationError):
            MachineConfig(pointer_policy="wrap").validate()


class TestFromEnv:
    """Test MachineConfig.from_env()."""

    def test_no_environment(self, monkeypatch):
        for name in ("BFC_TAPE_LENGTH", "BFC_EOF_VALUE", "BFC_POINTER_POLICY"):
            monkeypatch.delenv(name, raising=False)
        assert MachineConfig.from_env() == MachineConfig()

    def test_all_variables(self, monkeypatch):
        monkeypatch.setenv("BFC_TAPE_LENGTH", "500")
        monkeypatch.setenv("BFC_EOF_VALUE", "0")
        monkeypatch.setenv("BFC_POINTER_POLICY", "WRAP")
        config = MachineConfig.from_env()
        assert config.tape_length == 500
        assert config.eof_value == 0
        assert config.pointer_policy is PointerPolicy.WRAP

    def test_hex_eof_value(self, monkeypatch):
        monkeypatch.setenv("BFC_EOF_VALUE", "0x0A")
        assert MachineConfig.from_env().eof_value == 10

    def test_invalid_values_ignored(self, monkeypatch, caplog):
        """Unparseable values keep the default and log a warning."""
        monkeypatch.setenv("BFC_TAPE_LENGTH", "lots")
        monkeypatch.setenv("BFC_EOF_VALUE", "minus one")
        monkeypatch.setenv("BFC_POINTER_POLICY", "bounce")
        with caplog.at_level(logging.WARNING, logger="bfc.config"):
            config = MachineConfig.from_env()
        assert config == MachineConfig()
        assert "BFC_TAPE_LENGTH" in caplog.text
        assert "BFC_EOF_VALUE" in caplog.text
        assert "BFC_POINTER_POLICY" in caplog.text
