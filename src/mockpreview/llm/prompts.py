"""Prompt templates for LLM calls."""

# Bump when the rubric changes so generated artifacts can be compared.
PROMPT_VERSION = "3"

SYSTEM_PROMPT = "You are an expert React engineer who writes realistic mock data for UI previews."


PROJECT_CONTEXT_BLOCK = """PROJECT CONTEXT:
Name: {name}
Description: {description}
Dependencies: {dependencies}
README (excerpt):
{readme}
"""


MOCK_DATA_RULES = """Rules for the mock data:
1. Data must look real for this project: real-sounding names, emails, prices, dates, addresses.
   Never use placeholders such as "foo", "bar", "test" or "Lorem ipsum".
2. Every list-shaped value must contain between 3 and 5 items.
3. Image URLs must use the format https://picsum.photos/seed/<word>/<width>/<height>.
4. Callback props (onClick, onChange, ...) must be omitted; they cannot be expressed in JSON.
"""


COMPONENT_ANALYSIS_PROMPT = """Analyze the following React component and describe what it needs to render in isolation.

{project_context}
FILE: {filename}
LANGUAGE: {language}

Output a single JSON object with exactly these keys:
1. "props": realistic mock values for every prop the component reads.
2. "wrappers": booleans describing the runtime environment the component needs.
   - "router": true if it uses react-router (Link, NavLink, useNavigate, useParams, useLocation).
   - "redux": true if it uses react-redux (useSelector, useDispatch, connect).
   - "query": true if it uses react-query / @tanstack/react-query (useQuery, useMutation).
3. "networkMocks": one entry per network request the component makes (fetch, axios, useQuery),
   each shaped as {{"urlPattern": "<distinctive part of the URL>", "method": "GET", "response": <JSON body>}}.
   Infer the response shape from how the fetched data is destructured and used in the component body.
   Use an empty list if the component makes no requests.

{rules}
Output ONLY valid JSON. No markdown, no code fences, no commentary.

COMPONENT SOURCE:
{source}
"""


COMPONENT_PROPS_PROMPT = """Analyze the following React component and describe what it needs to render in isolation.

{project_context}
FILE: {filename}
LANGUAGE: {language}

Output a single JSON object with exactly these keys:
1. "props": realistic mock values for every prop the component reads.
2. "wrappers": booleans describing the runtime environment the component needs.
   - "router": true if it uses react-router (Link, NavLink, useNavigate, useParams, useLocation).
   - "redux": true if it uses react-redux (useSelector, useDispatch, connect).
   - "query": true if it uses react-query / @tanstack/react-query (useQuery, useMutation).

{rules}
Output ONLY valid JSON. No markdown, no code fences, no commentary.

COMPONENT SOURCE:
{source}
"""
