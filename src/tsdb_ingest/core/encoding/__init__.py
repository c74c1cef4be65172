"""Encoders for recent-history query output."""
