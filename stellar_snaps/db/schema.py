"""Database schema definitions for stellar-snaps."""

SCHEMA = """
-- Snaps: payment requests published by creators
CREATE TABLE IF NOT EXISTS snaps (
    id TEXT PRIMARY KEY,
    creator TEXT NOT NULL,

    -- Display
    title TEXT NOT NULL,
    description TEXT,
    image_url TEXT,

    -- Payment
    destination TEXT NOT NULL,
    asset_code TEXT DEFAULT 'XLM',
    asset_issuer TEXT,
    amount TEXT,
    memo TEXT,
    memo_type TEXT DEFAULT 'MEMO_TEXT',

    network TEXT DEFAULT 'testnet',

    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_snaps_creator ON snaps(creator, created_at DESC);
"""
