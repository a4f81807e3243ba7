"""Tests for the film catalog service."""
