"""Binary archive codec (header, directory, payloads, tag index)."""
