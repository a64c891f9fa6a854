"""Shared utilities for the Twitter Ads SDK."""
