from __future__ import annotations

from ..schemas import HabitatRequest
from .common import describe, yes_no


_HABITAT_SHAPE = """{
  "recommendations": [
    {
      "id": "1",
      "title": "Action title",
      "priority": "Critical|High|Medium|Low",
      "category": "Restoration|Protection|Connectivity|Monitoring|Community",
      "description": "Detailed description",
      "targetSpecies": ["Species 1", "Species 2"],
      "timeframe": "6-12 months",
      "cost": "$5,000-15,000",
      "difficulty": "Easy|Medium|Hard",
      "steps": ["Step 1", "Step 2", "Step 3", "Step 4"],
      "expectedOutcomes": ["Outcome 1", "Outcome 2", "Outcome 3"],
      "fundingSources": ["Source 1", "Source 2"]
    }
  ],
  "propertySpecificNotes": "Additional context or considerations for this specific property"
}"""

_HABITAT_FOCUS = """Focus on:
- Native species and ecosystems
- Climate resilience and adaptation
- Practical solutions for rural properties
- Cost-effective approaches suitable for the property size
- Integration with existing land management practices
- Compliance with local environmental regulations"""


def build_habitat_prompt(request: HabitatRequest) -> str:
    assessment = request.assessment
    return (
        "As a habitat conservation expert, provide personalized habitat protection "
        "recommendations for a property with the following characteristics:\n\n"
        "Property Details:\n"
        f"- Size: {describe(assessment.property_size)} hectares\n"
        f"- Region: {describe(assessment.region)}\n"
        f"- Primary Habitat Type: {describe(assessment.habitat_type)}\n"
        f"- Habitat Connectivity: {describe(assessment.connectivity)}\n"
        f"- Current Management: {describe(assessment.current_management)}\n"
        f"- Threatened Species Present: {yes_no(assessment.threatened_species)}\n"
        f"- Permanent Water Sources: {yes_no(assessment.water_sources)}\n\n"
        "Please provide 1-2 specific, actionable habitat protection recommendations "
        "tailored to this property. For each recommendation include a title, priority, "
        "category, a 2-3 sentence description, target species, implementation timeframe, "
        "estimated cost range, difficulty, 4-6 implementation steps, 3-4 expected "
        "outcomes and 2-3 relevant funding sources.\n\n"
        f"{_HABITAT_FOCUS}\n\n"
        f"Return the response as a JSON object with this structure:\n{_HABITAT_SHAPE}"
    )
