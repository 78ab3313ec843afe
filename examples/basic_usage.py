"""Basic usage example for tspectrum.

This example shows how to:
1. Build the adapters and the judge from settings
2. Run a paid-tier comparison through the service
3. Print the scored translations
"""

import asyncio

from tspectrum.core.errors import ConfigurationError
from tspectrum.core.models import CallerIdentity, ServiceTier
from tspectrum.orchestrator import TranslationOrchestrator
from tspectrum.providers.factory import TransportPool, build_adapters, build_judge
from tspectrum.quota import QuotaTracker
from tspectrum.service import TranslationService
from tspectrum.utils.config import get_settings


async def main() -> None:
    """Paid-tier comparison example."""
    # 1. Build adapters and judge (needs TSPECTRUM_OPENAI_API_KEY,
    #    TSPECTRUM_ANTHROPIC_API_KEY and TSPECTRUM_GOOGLE_API_KEY)
    settings = get_settings()
    pool = TransportPool(settings)
    try:
        adapters = build_adapters(settings, tiers=(ServiceTier.PAID,), pool=pool)
        judge = build_judge(settings, pool)
    except ConfigurationError as e:
        print(f"Error: {e}")
        return

    orchestrator = TranslationOrchestrator(adapters, judge=judge)
    service = TranslationService(orchestrator, QuotaTracker())

    # 2. Run the comparison
    caller = CallerIdentity(account_id="example", tier=ServiceTier.PAID)
    print("Comparing translations...")
    try:
        result = await service.compare("삶이 그대를 속일지라도 슬퍼하거나 노하지 말라.", caller, "문학")
    finally:
        await orchestrator.close()

    # 3. Print results
    print("\n" + "=" * 60)
    print("TRANSLATION COMPARISON")
    print("=" * 60)
    for attempt in result.successful():
        print(f"\n[{attempt.provider_id}]")
        print(f"   {attempt.translated_text}")
        print(f"   Complexity: {attempt.complexity_score}")
        if attempt.spectrum_score is not None:
            print(f"   Spectrum: {attempt.spectrum_score:.1f} - {attempt.spectrum_feedback}")

    for attempt in result.failed():
        print(f"\n[{attempt.provider_id}] failed: {attempt.failure_reason}")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
