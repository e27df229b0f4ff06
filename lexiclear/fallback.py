"""
Deterministic explanations used when the language model cannot be reached.
"""

from typing import Dict, List

from .models import Explanation


_KNOWN_TERMS: Dict[str, Explanation] = {
    "force majeure": Explanation(
        definition=(
            "Force majeure is a clause in contracts that frees both parties from liability or "
            "obligation when an extraordinary event or circumstance beyond their control prevents "
            "one or both parties from fulfilling their obligations under the contract."
        ),
        example=(
            "For example, if a hurricane destroys a factory that was under contract to produce goods, "
            "the force majeure clause might excuse the factory from fulfilling its obligations."
        ),
        implications=[
            "Force majeure clauses must be specifically drafted and cannot be assumed to cover all unforeseen events",
            "The clause typically lists specific events like natural disasters, wars, or acts of God",
            "Whether COVID-19 qualifies as force majeure has been heavily litigated with mixed results",
        ],
    ),
    "indemnity clause": Explanation(
        definition=(
            "An indemnity clause is a contractual obligation where one party agrees to compensate "
            "another party for any losses or damages that arise from the contract or from specified "
            "circumstances."
        ),
        example=(
            "In a construction contract, the contractor might agree to indemnify the property owner "
            "against any claims arising from the contractor's work on the property."
        ),
        implications=[
            "Indemnity clauses can create significant financial liability",
            "They are often heavily negotiated in contracts",
            "The scope of indemnity should be clearly defined to avoid ambiguity",
        ],
    ),
    "non-disclosure agreement": Explanation(
        definition=(
            "A non-disclosure agreement (NDA) is a legally binding contract that establishes a "
            "confidential relationship between parties to protect any type of confidential and "
            "proprietary information or trade secrets."
        ),
        example=(
            "When a company shares its business plans with a potential partner, they might sign an "
            "NDA to prevent the partner from sharing those plans with competitors."
        ),
        implications=[
            "NDAs must clearly define what constitutes confidential information",
            "They typically have time limitations on the confidentiality obligation",
            "Violations can result in lawsuits and significant damages",
        ],
    ),
    "liquidated damages": Explanation(
        definition=(
            "Liquidated damages are a predetermined amount of money that must be paid as damages for "
            "failure to perform under a contract, when actual damages would be difficult to calculate."
        ),
        example=(
            "A construction contract might include a liquidated damages clause requiring the "
            "contractor to pay $1,000 for each day of delay beyond the agreed completion date."
        ),
        implications=[
            "Liquidated damages must be a reasonable estimate of actual damages",
            "If deemed a penalty rather than reasonable estimate, courts may not enforce them",
            "They provide certainty about liability for contract breaches",
        ],
    ),
    "arbitration clause": Explanation(
        definition=(
            "An arbitration clause is a provision in a contract that requires the parties to resolve "
            "disputes through arbitration rather than through court litigation."
        ),
        example=(
            "An employment contract might include an arbitration clause requiring any disputes about "
            "employment termination to be resolved through binding arbitration."
        ),
        implications=[
            "Arbitration is generally faster and less formal than court litigation",
            "Arbitration decisions are typically binding with limited appeal rights",
            "Some jurisdictions have specific requirements for enforceable arbitration clauses",
        ],
    ),
    "statute of limitations": Explanation(
        definition=(
            "A statute of limitations is a law that sets the maximum time after an event within which "
            "legal proceedings may be initiated."
        ),
        example=(
            "If a state has a 3-year statute of limitations for personal injury claims, someone "
            "injured in a car accident must file suit within 3 years of the accident."
        ),
        implications=[
            "Missing the statute of limitations deadline usually bars the claim completely",
            "Different types of claims have different limitation periods",
            "The clock typically starts ticking when the injury is discovered or should have been discovered",
        ],
    ),
}

_GENERIC_IMPLICATIONS = [
    "Consult legal resources for more specific information",
    "The application of this term may vary by jurisdiction",
    "Consider seeking professional legal advice for your specific situation",
]

# Returned when not even the requested term is known.
GENERIC_EXPLANATION = Explanation(
    definition="A legal term that refers to concepts in the justice system.",
    example="In legal practice, this term might be relevant in various contexts.",
    implications=[
        "Consult primary legal sources for authoritative definitions",
        "The application may vary by jurisdiction",
        "Consider seeking advice from a qualified legal professional",
    ],
)

_PREVIEW_LENGTH = 100


def known_terms() -> List[str]:
    """Terms with hand-written explanations."""
    return list(_KNOWN_TERMS)


def generate_fallback(term: str, reason: str = "API limit") -> Explanation:
    """
    Build an explanation without calling the language model.

    Known terms get their authored entry. Anything else gets a generic
    template mentioning the term and the reason.

    Args:
        term: Legal term as typed by the user
        reason: Why the fallback was needed; only shown for unknown terms

    Returns:
        Explanation
    """
    known = _KNOWN_TERMS.get(term.strip().lower())
    if known is not None:
        return known

    return Explanation(
        definition=f"{term} is a legal term that refers to concepts in the justice system. (Note: {reason})",
        example=f"For example, {term} might apply in situations where...",
        implications=list(_GENERIC_IMPLICATIONS),
    )


def simplification_placeholder(text: str, reason: str) -> str:
    """Text returned by /simplify when the generative model cannot be used."""
    preview = text[:_PREVIEW_LENGTH]
    if len(text) > _PREVIEW_LENGTH:
        preview += "..."

    return (
        f"Simplified version unavailable ({reason}).\n\n"
        "This is a placeholder response because the document could not be simplified right now.\n\n"
        "To enable AI-powered document simplification:\n"
        "1. Get a Google Gemini API key from https://aistudio.google.com/\n"
        "2. Set it as GOOGLE_API_KEY in your environment or .dev.env file\n"
        "3. Restart the server\n\n"
        f'Original text preview: "{preview}"'
    )
