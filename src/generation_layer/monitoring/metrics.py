"""Custom Prometheus metrics for the AI Generation Layer.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules should be configured for:
- generation_exhausted_total (every model failed, users saw "try again later")
- llm_attempts_total{outcome="overloaded"|"rate_limited"} (provider saturation)
- parse_fallbacks_total (model output drifting away from the JSON contract)
"""

from prometheus_client import Counter, Histogram

# === Attempt Metrics ===

llm_attempts_total = Counter(
    "llm_attempts_total",
    "Total model call attempts by model and outcome",
    ["model", "outcome"],
)
"""
Model call attempts counter.

Labels:
- model: Model identity (e.g., gemini-2.0-flash)
- outcome: success, overloaded, rate_limited, other

Alert thresholds:
- WARN: overloaded + rate_limited > 10% of attempts
"""

model_fallbacks_total = Counter(
    "model_fallbacks_total",
    "Times the fallback chain gave up on a model and moved to the next",
    ["task", "model"],
)
"""
Model fallback counter.

Labels:
- task: test-cases, document
- model: Model that was abandoned
"""

generation_exhausted_total = Counter(
    "generation_exhausted_total",
    "Generation calls where every model in the chain failed",
    ["task"],
)
"""
Chain exhaustion counter.

Alert thresholds:
- WARN: any increase
- CRITICAL: > 1% of generation requests
"""

# === Parsing Metrics ===

parse_fallbacks_total = Counter(
    "parse_fallbacks_total",
    "Parser degradations by task and recovery level",
    ["task", "level"],
)
"""
Parser degradation counter.

Labels:
- task: test-cases, document
- level: embedded_json (found inside prose), content_regex, raw_text, placeholder
"""

# === Request Metrics ===

generation_requests_total = Counter(
    "generation_requests_total",
    "Generation requests handled by the facade",
    ["task", "status"],
)
"""
Facade request counter.

Labels:
- task: test-cases, document
- status: success, invalid_input, exhausted
"""

# === LLM Performance Metrics ===

llm_latency_seconds = Histogram(
    "llm_latency_seconds",
    "LLM generation latency in seconds",
    ["model", "success"],
    buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0, 120.0],
)
"""
LLM generation latency histogram.

Labels:
- model: Model identity
- success: true (generation succeeded), false (generation failed)

Alert thresholds:
- WARN: p95 > 30s
"""

llm_tokens_total = Counter(
    "llm_tokens_total",
    "Total tokens consumed by model and type",
    ["model", "token_type"],
)
"""
Token consumption counter.

Labels:
- model: Model identity
- token_type: prompt (input tokens), completion (output tokens)

Used for cost estimation.
"""
