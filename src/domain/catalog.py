from typing import Dict, List

from src.domain.models import RepoIdentifier

# Projects compared in the "Main Repository Metrics" section
MAIN_REPOSITORIES: List[RepoIdentifier] = [
    RepoIdentifier(owner="getsentry", name="sentry"),
    RepoIdentifier(owner="PostHog", name="posthog"),
    RepoIdentifier(owner="glitchtip", name="glitchtip-backend"),
    RepoIdentifier(owner="prometheus", name="prometheus"),
    RepoIdentifier(owner="open-telemetry", name="opentelemetry-specification"),
    RepoIdentifier(owner="elastic", name="elasticsearch"),
    RepoIdentifier(owner="opstrace", name="opstrace"),
]

# Client libraries per language, reported in this order
SDKS: Dict[str, List[RepoIdentifier]] = {
    "rust": [
        RepoIdentifier(owner="getsentry", name="sentry-rust"),
        RepoIdentifier(owner="PostHogHQ", name="posthog-rust"),
        RepoIdentifier(owner="prometheus", name="client_rust"),
        RepoIdentifier(owner="open-telemetry", name="opentelemetry-rust"),
    ],
    "node": [
        RepoIdentifier(owner="getsentry", name="sentry-javascript"),
        RepoIdentifier(owner="PostHog", name="posthog-node"),
        RepoIdentifier(owner="siimon", name="prom-client"),
        RepoIdentifier(owner="open-telemetry", name="opentelemetry-js"),
    ],
}

COMMUNITY_TAGS: List[str] = ["sentry", "posthog", "prometheus", "elasticsearch"]
