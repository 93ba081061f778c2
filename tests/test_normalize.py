"""Tests for company name normalization."""

from __future__ import annotations

from studentstay.services.normalize import normalize_name


def test_trims_and_lowercases() -> None:
    assert normalize_name("  IPG  ") == "ipg"


def test_internal_whitespace_preserved() -> None:
    assert normalize_name("Instituto  Politécnico") == "instituto  politécnico"


def test_empty_and_none_normalize_to_empty() -> None:
    assert normalize_name("") == ""
    assert normalize_name(None) == ""
    assert normalize_name("   ") == ""


def test_idempotent() -> None:
    once = normalize_name("  Universidade do PORTO ")
    assert normalize_name(once) == once


def test_no_accent_folding() -> None:
    assert normalize_name("Politécnico") != normalize_name("Politecnico")
