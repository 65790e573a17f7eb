"""Idempotent scaffolding for Manifest V3 browser extensions (React + Vite + TypeScript)."""

__version__ = "0.1.0"
