"""Fertility-treatment subsidy calculator: rules engine and history service."""
