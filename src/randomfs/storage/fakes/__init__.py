# Fake implementations for testing

from .fake_ipfs import FakeContentStore

__all__ = ["FakeContentStore"]
