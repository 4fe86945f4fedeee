#!/usr/bin/env python3
"""
Test suite for ScrumBot.

    # Run all tests
    uv run python -m pytest tests/ -v

    # Skip the mocked LLM tests
    uv run python -m pytest tests/ -v -m "not llm"
"""
