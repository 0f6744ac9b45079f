"""Main script for running TrustLens."""

import argparse
import asyncio

import uvicorn

from .domain.services.classifier import badge_for
from .infrastructure.config import TrustLensConfig
from .infrastructure.dependencies import ServiceContainer


def serve(config: TrustLensConfig) -> None:
    """Run the rating API."""
    uvicorn.run(
        "trust_lens.api.app:create_app",
        factory=True,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


async def lookup(config: TrustLensConfig) -> None:
    """Interactively resolve ratings the way the extension does."""
    print("TrustLens - news source reliability lookup")
    print("------------------------------------------")

    container = ServiceContainer(config)
    resolver = container.get_fallback_resolver()
    external = container.get_external_rating_service()

    status = await resolver.check_connection()
    if not status.success:
        print(f"Remote rating source unavailable ({status.error}), using local data")

    try:
        while True:
            value = input("\nEnter a URL or domain (or 'quit' to exit): ")
            if value.lower() in ('quit', 'exit', 'q'):
                break

            resolved = await resolver.resolve(value)
            if resolved is None:
                print("\nNo rating available.")
                continue

            badge = badge_for(resolved.rating)
            print(f"\n{resolved.domain}  [{badge.text}]")
            print(f"Rating: {resolved.rating:.1f}/10 ({resolved.label}, grade {resolved.grade.value})")
            print(f"Source: {resolved.source.value}")
            if resolved.total_votes is not None:
                print(f"Votes: {resolved.total_votes}")

            report = await external.get_report(resolved.domain)
            if report is not None:
                print("\nMedia Bias/Fact Check:")
                print(f"Bias: {report.bias.label} ({report.bias.score:.0f})")
                print(f"Factual: {report.factual.label} ({report.factual.score:.0f})")
    finally:
        # Clean up
        await container.shutdown()


def main() -> None:
    """Command line entry point."""
    parser = argparse.ArgumentParser(prog="trustlens", description=__doc__)
    parser.add_argument(
        "command",
        nargs="?",
        choices=("serve", "lookup"),
        default="serve",
        help="Run the API server or an interactive lookup",
    )
    args = parser.parse_args()

    config = TrustLensConfig.from_env()
    if args.command == "lookup":
        asyncio.run(lookup(config))
    else:
        serve(config)


if __name__ == "__main__":
    main()
