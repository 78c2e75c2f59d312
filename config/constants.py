"""
Index definitions and search settings

Indexes are provisioned outside this service; these descriptors only name
them and their key attributes.
"""
import os

from models.keys import SecondaryIndex


# spots by continent, ranged by country code
CONTINENT_COUNTRY_INDEX = SecondaryIndex("continent-country-index", "continent", "country")

# spots by continent, ranged by binary geohash (prefix = containing cell)
CONTINENT_GEOHASH_INDEX = SecondaryIndex("continent-geohash-index", "continent", "geohash")

# Items per DynamoDB page; pages are followed until exhausted
QUERY_PAGE_SIZE = int(os.environ.get('QUERY_PAGE_SIZE', '100'))

# Concurrent cell queries per radius search (a search has at most 9 cells)
SEARCH_MAX_WORKERS = int(os.environ.get('SEARCH_MAX_WORKERS', '9'))
