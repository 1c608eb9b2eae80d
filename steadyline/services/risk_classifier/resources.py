"""Static crisis resource directory and crisis check-in UI.

Pure reference data rendered by the chat client when a message is
flagged. Nothing here is generated, and the classifier never selects a
region; the caller does.
"""
from types import MappingProxyType
from typing import Any, Dict, Mapping

from steadyline.shared.models import CrisisResource

INTERNATIONAL_REGION = "international"

CRISIS_RESOURCES: Mapping[str, CrisisResource] = MappingProxyType({
    "US": CrisisResource(
        name="988 Suicide & Crisis Lifeline",
        phone="988",
        text="988",
        description="Free, confidential support 24/7",
    ),
    "UK": CrisisResource(
        name="Samaritans",
        phone="116 123",
        description="Free to call, 24 hours a day",
    ),
    "Canada": CrisisResource(
        name="Talk Suicide Canada",
        phone="1-833-456-4566",
        description="Available 24/7",
    ),
    "Australia": CrisisResource(
        name="Lifeline Australia",
        phone="13 11 14",
        description="24-hour crisis support",
    ),
    INTERNATIONAL_REGION: CrisisResource(
        name="International Association for Suicide Prevention",
        url="https://www.iasp.info/resources/Crisis_Centres/",
        description="Find help in your country",
    ),
})

GROUNDING_RESUME_MESSAGE = (
    "I understand you'd like to continue chatting. I'm here to help you feel "
    "grounded. Let's take this one moment at a time. What feels most present "
    "for you right now?"
)


def get_resource(region: str) -> CrisisResource:
    """Look up a region's crisis line.

    Args:
        region: Region key, e.g. "US" or "UK"

    Returns:
        The region's resource, or the international directory if the
        region is unknown
    """
    return CRISIS_RESOURCES.get(region, CRISIS_RESOURCES[INTERNATIONAL_REGION])


def get_crisis_ui(region: str = "US") -> Dict[str, Any]:
    """Get the static safety check-in shown when a message is flagged.

    The client first asks whether the user is at risk right now. "Yes"
    leads to the support step with crisis lines; "No" resumes the
    conversation. From the support step the user may continue chatting for
    grounding only, after confirming twice.

    Args:
        region: Region whose crisis line is listed first

    Returns:
        Crisis UI configuration for the frontend
    """
    primary = get_resource(region)
    resources = [primary.to_dict()]
    if primary is not CRISIS_RESOURCES[INTERNATIONAL_REGION]:
        resources.append(CRISIS_RESOURCES[INTERNATIONAL_REGION].to_dict())

    return {
        "check_in": {
            "title": "Safety Check-In",
            "message": (
                "I want to check in with you for safety. When you said that, "
                "did you mean you're feeling at risk of harming yourself right now?"
            ),
            "options": [
                {"id": "at_risk", "label": "Yes, I'm at risk", "next": "support"},
                {"id": "expressing", "label": "No, I'm just expressing feelings", "next": "resume"},
            ],
        },
        "support": {
            "title": "You Deserve Real Support",
            "message": (
                "I'm really glad you said something. You took an important step. "
                "I can't provide emergency help, but you deserve real support "
                "right now from people trained for this."
            ),
            "resources": resources,
            "grounding_prompt": (
                "If you'd like, we can continue chatting for grounding support only."
            ),
            "grounding_confirmation": (
                "Tap again to confirm you understand this is grounding support, "
                "not crisis care."
            ),
            "grounding_message": GROUNDING_RESUME_MESSAGE,
        },
        "resume": {
            "title": "Thank You for Clarifying",
            "message": (
                "I appreciate you letting me know. It's okay to express hard "
                "feelings here. We can keep talking, and I'll stay focused on "
                "support and reflection."
            ),
        },
        "show_emergency": True,
    }
