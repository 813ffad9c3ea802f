import json
import logging
from typing import Optional

import httpx
import pytest

from app.db.models.enums import ConfidenceLevel, ValidityStatus
from app.services.fact_check.provider import (
    AnalysisResult,
    FactCheckProvider,
    classify_score,
    generate_mock_analysis,
)

logger = logging.getLogger(__name__)

PROVIDER_URL = "https://factcheck.test/v1/chat/completions"

LIVE_ANALYSIS = {
    "accuracy_score": 0.35,
    "validity_status": "FALSE",
    "confidence_level": "high",
    "analysis": "The claim contradicts published census data.",
    "sources": ["National census 2020"],
    "corrections": ["The population is roughly 2 million, not 20 million."],
    "reasoning": "Official figures disagree by an order of magnitude.",
    "factual_claims": [
        {
            "claim": "The city has 20 million residents",
            "verification_status": "FALSE",
            "confidence": 0.9,
            "explanation": "Census reports about 2 million.",
        }
    ],
}


def chat_completion(content: Optional[str]) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def live_provider(handler, **kwargs) -> FactCheckProvider:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return FactCheckProvider(
        api_url=PROVIDER_URL,
        api_key="test-key",
        enable_mock=False,
        client=client,
        **kwargs
    )


class TestClassifyScore:
    @pytest.mark.parametrize("score,validity,confidence", [
        (0.95, ValidityStatus.TRUE, ConfidenceLevel.HIGH),
        (0.8, ValidityStatus.TRUE, ConfidenceLevel.HIGH),
        (0.79, ValidityStatus.PARTIALLY_TRUE, ConfidenceLevel.MEDIUM),
        (0.6, ValidityStatus.PARTIALLY_TRUE, ConfidenceLevel.MEDIUM),
        (0.59, ValidityStatus.MISLEADING, ConfidenceLevel.MEDIUM),
        (0.4, ValidityStatus.MISLEADING, ConfidenceLevel.MEDIUM),
        (0.39, ValidityStatus.FALSE, ConfidenceLevel.HIGH),
        (0.0, ValidityStatus.FALSE, ConfidenceLevel.HIGH),
    ])
    def test_thresholds(self, score, validity, confidence):
        assert classify_score(score) == (validity, confidence)


class TestGenerateMockAnalysis:
    def test_empty_content_scores_base(self):
        result = generate_mock_analysis("", "")
        assert result.accuracy_score == pytest.approx(0.6)
        assert result.validity_status == ValidityStatus.PARTIALLY_TRUE
        assert result.confidence_level == ConfidenceLevel.MEDIUM

    def test_score_grows_with_length(self):
        result = generate_mock_analysis("x" * 500, "q")
        assert result.accuracy_score == pytest.approx(0.75)

    def test_score_is_capped_for_long_content(self):
        result = generate_mock_analysis("x" * 2000, "q")
        assert result.accuracy_score == pytest.approx(0.9)
        assert result.validity_status == ValidityStatus.TRUE
        assert result.confidence_level == ConfidenceLevel.HIGH

    def test_technical_keyword_boost(self):
        plain = generate_mock_analysis("Question: sorting\n\nAnswer: use a loop", "sorting")
        boosted = generate_mock_analysis("Question: sorting\n\nAnswer: use an ALGORITHM", "sorting")
        assert boosted.accuracy_score > plain.accuracy_score
        assert generate_mock_analysis("machine learning", "q").accuracy_score == pytest.approx(0.6 + 16 / 1000 * 0.3 + 0.1)

    def test_technical_boost_is_capped(self):
        result = generate_mock_analysis("programming " * 200, "q")
        assert result.accuracy_score == pytest.approx(0.95)

    def test_is_deterministic(self):
        content = "Question: Is water wet?\n\nAnswer: Yes."
        assert generate_mock_analysis(content, "Is water wet?") == generate_mock_analysis(content, "Is water wet?")

    def test_single_claim_carries_score(self):
        result = generate_mock_analysis("some content", "q")
        assert len(result.claims) == 1
        assert result.claims[0].confidence == result.accuracy_score
        assert result.sources == ["Mock fact-checking service", "Content analysis"]


class TestFactCheckProvider:
    def test_mock_enabled_never_calls_provider(self):
        def handler(request):
            raise AssertionError("provider must not be called in mock mode")

        client = httpx.Client(transport=httpx.MockTransport(handler))
        provider = FactCheckProvider(api_key="key", enable_mock=True, client=client)

        assert provider.live_mode is False
        assert provider.analyze("content", "q") == generate_mock_analysis("content", "q")

    def test_missing_api_key_disables_live_mode(self, caplog):
        with caplog.at_level("WARNING"):
            provider = FactCheckProvider(api_key="", enable_mock=False)
        assert provider.live_mode is False
        assert "FACTCHECK_AI_API_KEY is empty" in caplog.text

    def test_live_response_is_parsed(self):
        captured = {}

        def handler(request):
            captured["auth"] = request.headers["Authorization"]
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=chat_completion(json.dumps(LIVE_ANALYSIS)))

        provider = live_provider(handler)
        result = provider.analyze("Question: q\n\nAnswer: a", "q")

        assert captured["auth"] == "Bearer test-key"
        assert captured["body"]["messages"][0]["role"] == "system"
        assert "Question: q" in captured["body"]["messages"][1]["content"]
        assert result.accuracy_score == pytest.approx(0.35)
        assert result.validity_status == ValidityStatus.FALSE
        assert result.confidence_level == ConfidenceLevel.HIGH
        assert result.claims[0].claim == "The city has 20 million residents"

    def test_code_fenced_content_is_parsed(self):
        fenced = "```json\n" + json.dumps(LIVE_ANALYSIS) + "\n```"
        provider = live_provider(lambda request: httpx.Response(200, json=chat_completion(fenced)))
        assert provider.analyze("c", "q").validity_status == ValidityStatus.FALSE

    def test_top_level_payload_is_accepted(self):
        provider = live_provider(lambda request: httpx.Response(200, json=LIVE_ANALYSIS))
        assert isinstance(provider.analyze("c", "q"), AnalysisResult)

    def test_http_error_falls_back_to_mock(self, caplog):
        provider = live_provider(lambda request: httpx.Response(503, text="overloaded"))
        with caplog.at_level("WARNING"):
            result = provider.analyze("content", "q")
        assert result == generate_mock_analysis("content", "q")
        assert "falling back to mock analysis" in caplog.text

    def test_timeout_falls_back_to_mock(self, caplog):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        provider = live_provider(handler, timeout=0.5)
        with caplog.at_level("WARNING"):
            result = provider.analyze("content", "q")
        assert result == generate_mock_analysis("content", "q")
        assert "timed out" in caplog.text

    def test_connection_error_falls_back_to_mock(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        provider = live_provider(handler)
        assert provider.analyze("content", "q") == generate_mock_analysis("content", "q")

    def test_oversized_response_falls_back_to_mock(self, caplog):
        body = json.dumps(chat_completion(json.dumps(LIVE_ANALYSIS))).encode()
        provider = live_provider(lambda request: httpx.Response(200, content=body), max_response_bytes=64)
        with caplog.at_level("WARNING"):
            result = provider.analyze("content", "q")
        assert result == generate_mock_analysis("content", "q")
        assert "exceeded 64 bytes" in caplog.text

    @pytest.mark.parametrize("payload", [
        b"not json at all",
        json.dumps({"choices": []}).encode(),
        json.dumps(chat_completion("{\"accuracy_score\": 3.5}")).encode(),
        json.dumps(chat_completion("no json here")).encode(),
        json.dumps([1, 2, 3]).encode(),
        json.dumps(chat_completion(None)).encode(),
    ])
    def test_unusable_payload_falls_back_to_mock(self, payload):
        provider = live_provider(lambda request: httpx.Response(200, content=payload))
        assert provider.analyze("content", "q") == generate_mock_analysis("content", "q")

    def test_null_message_content_falls_back_to_mock(self, caplog):
        # Refusals and tool calls come back without message content
        body = json.dumps(chat_completion(None)).encode()
        provider = live_provider(lambda request: httpx.Response(200, content=body))
        with caplog.at_level("WARNING"):
            result = provider.analyze("content", "q")
        assert result == generate_mock_analysis("content", "q")
        assert "no message content" in caplog.text

    def test_close_leaves_injected_client_open(self):
        client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
        provider = FactCheckProvider(api_key="k", enable_mock=False, client=client)
        provider.close()
        assert client.is_closed is False
        client.close()
