"""Constants for GitHub service."""

GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"

# GitHub's maximum page size for list and search endpoints.
# A page shorter than this is the last one.
PAGE_SIZE = 100

# The search API never returns more than 1000 results for a query
SEARCH_RESULT_LIMIT = 1000

# Repositories visible to the authenticated user
REPO_AFFILIATION = "owner,collaborator,organization_member"

# Repositories the authenticated user owns outright
OWNER_AFFILIATION = "owner"
