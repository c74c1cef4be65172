"""Pure domain: models, decoding, bounded buffers and ports."""
