"""Test helpers: fake clock, recording stream and a tiny screen emulator."""
