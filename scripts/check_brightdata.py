"""Check the BrightData credential and run one live company scrape."""
import sys
import os
import asyncio
sys.path.insert(0, ".")

from dotenv import load_dotenv
load_dotenv()

print("=== Checking BrightData Scraper ===\n")

# Check key
api_key = os.getenv("BRIGHTDATA_API_KEY")
print(f"1. BRIGHTDATA_API_KEY: {'SET' if api_key else 'NOT SET'}")
if not api_key:
    print("   ERROR: Add BRIGHTDATA_API_KEY to .env file")
    sys.exit(1)

print("\n2. Initializing scraper...")
try:
    from linkedin_research.services.matching.normalizer import normalize
    from linkedin_research.services.scraping import SnapshotCache, create_live_scraper
    from linkedin_research.services.scraping.linkedin_urls import build_company_urls
    scraper = create_live_scraper(SnapshotCache(), api_key=api_key)
    print("   ✓ Scraper initialized")
except Exception as e:
    print(f"   ✗ Failed: {e}")
    sys.exit(1)

company = sys.argv[1] if len(sys.argv) > 1 else "Swiggy"


async def check():
    status = await scraper.client.check_status()
    print(f"\n3. Connected: {status['connected']} (key {status['api_key']})")
    if not status["connected"]:
        print(f"   Error: {status.get('error', 'unauthorized')}")
        return

    urls = build_company_urls([company])
    print(f"\n4. Scraping {urls[0]}")
    print("   Calling BrightData... (this may take up to 2 minutes)")
    try:
        raw = await scraper.scrape_companies(urls)
    except Exception as e:
        print(f"   ✗ Failed: {type(e).__name__}: {e}")
        return
    finally:
        await scraper.client.aclose()

    print(f"\n5. Result: {len(raw)} records")
    for record in normalize(raw, "high-fit"):
        print(f"   {record.company} | {record.industry} | {record.hq} | {record.region}")
        print(f"   Employees: {record.employee_count} -> {record.cloud_complexity} complexity")
        print(f"   Signals: {record.cloud_signals[:80]}")

asyncio.run(check())
print("\n=== Check Complete ===")
