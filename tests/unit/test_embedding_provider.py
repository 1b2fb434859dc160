"""Unit tests for the sentence-transformers provider.

The sentence_transformers module is replaced in sys.modules so no model is
downloaded.
"""

import sys
from unittest.mock import MagicMock, patch

import numpy as np
import pytest

from smoogle.adapters.outbound.embedding import SentenceTransformerProvider
from smoogle.core.domain.exceptions import ModelLoadError

pytestmark = pytest.mark.unit


@pytest.fixture
def fake_sentence_transformers():
    """Install a fake sentence_transformers module."""
    module = MagicMock()
    model = module.SentenceTransformer.return_value
    model.encode.return_value = np.ones((4, 384), dtype=np.float32)
    model.get_sentence_embedding_dimension.return_value = 384
    with patch.dict(sys.modules, {"sentence_transformers": module}):
        yield module


class TestSentenceTransformerProvider:
    """Tests for lazy, memoized model loading."""

    def test_model_not_loaded_on_construction(self, fake_sentence_transformers):
        """Constructing the provider does not touch the model."""
        provider = SentenceTransformerProvider("all-MiniLM-L6-v2")

        assert not provider.loaded
        fake_sentence_transformers.SentenceTransformer.assert_not_called()

    def test_load_is_memoized(self, fake_sentence_transformers):
        """The model is initialized once no matter how often load() is called."""
        provider = SentenceTransformerProvider("all-MiniLM-L6-v2", device="cpu")

        first = provider.load()
        second = provider.load()

        assert first is second
        assert provider.loaded
        fake_sentence_transformers.SentenceTransformer.assert_called_once_with(
            "all-MiniLM-L6-v2", device="cpu"
        )

    def test_embed_fn_requests_token_embeddings(self, fake_sentence_transformers):
        """The embed function returns the per-token matrix as numpy."""
        embed = SentenceTransformerProvider().load()

        output = embed("ERC20 token")

        assert isinstance(output, np.ndarray)
        assert output.shape == (4, 384)
        model = fake_sentence_transformers.SentenceTransformer.return_value
        _, kwargs = model.encode.call_args
        assert kwargs["output_value"] == "token_embeddings"

    def test_tensor_output_converted(self, fake_sentence_transformers):
        """Torch-like tensors are detached and converted to numpy."""
        tensor = MagicMock()
        tensor.detach.return_value.cpu.return_value.numpy.return_value = np.zeros((2, 3))
        model = fake_sentence_transformers.SentenceTransformer.return_value
        model.encode.return_value = tensor

        output = SentenceTransformerProvider().load()("token")

        assert output.shape == (2, 3)

    def test_load_failure_raises_model_load_error(self, fake_sentence_transformers):
        """Initialization failures surface as ModelLoadError with the cause."""
        original = OSError("model not found on hub")
        fake_sentence_transformers.SentenceTransformer.side_effect = original

        provider = SentenceTransformerProvider("missing/model")
        with pytest.raises(ModelLoadError) as exc_info:
            provider.load()

        assert exc_info.value.cause is original
        assert exc_info.value.extra_context["model"] == "missing/model"
        assert not provider.loaded

    def test_failed_load_is_retried(self, fake_sentence_transformers):
        """A failure is not cached; the next load() tries again."""
        model = MagicMock()
        fake_sentence_transformers.SentenceTransformer.side_effect = [OSError("offline"), model]

        provider = SentenceTransformerProvider()
        with pytest.raises(ModelLoadError):
            provider.load()

        assert callable(provider.load())
        assert fake_sentence_transformers.SentenceTransformer.call_count == 2

    def test_get_dimension(self, fake_sentence_transformers):
        """The dimension is read from the loaded model."""
        assert SentenceTransformerProvider().get_dimension() == 384
