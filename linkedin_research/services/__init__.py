# Services
# 
# Organized by domain:
#   - db/         Static company catalog
#   - scraping/   LinkedIn scraping (BrightData client, snapshot cache, URL helpers)
#   - matching/   Normalizing raw BrightData records into CompanyRecords
#
# reconciler.py sits at the root as an orchestrator
