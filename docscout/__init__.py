"""Live documentation retrieval for Swift developers."""
