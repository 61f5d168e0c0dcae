# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL Apollo.io logic: configuration, the HTTP client,
# the error taxonomy, parameter validation, response reshaping and the
# pagination cursor.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports Google ADK or FastMCP.  The adapters
#   (people, organizations, contacts, outreach) take an ApolloClient and a
#   params model and return plain dataclasses, so they can be exercised with
#   a fake client and no network.
# =============================================================================
