from __future__ import annotations

from ..schemas import NativeSpeciesRequest
from .common import describe


_SPECIES_SHAPE = """{
  "species": [
    {
      "name": "Common Name",
      "scientificName": "Scientific name",
      "type": "Flora|Fauna",
      "conservationStatus": "Least Concern/Near Threatened/Vulnerable/Endangered/Critically Endangered",
      "habitat": "Preferred habitat description",
      "characteristics": "Key identifying features and characteristics",
      "ecologicalRole": "Role in the ecosystem",
      "threats": ["List of main threats"],
      "conservationActions": ["List of conservation actions"],
      "culturalSignificance": "Indigenous cultural significance if applicable",
      "plantingTips": "For flora: planting and care tips",
      "observationTips": "For fauna: best times and places to observe"
    }
  ],
  "habitatInfo": {
    "description": "Description of the habitat type",
    "keyFeatures": ["List of key habitat features"],
    "conservationPriority": "High/Medium/Low",
    "threats": ["List of habitat threats"],
    "managementRecommendations": ["List of management actions"]
  },
  "resources": {
    "governmentPrograms": ["List of relevant government programs"],
    "fundingOpportunities": ["List of funding sources"],
    "expertContacts": ["List of relevant organizations"]
  }
}"""


def build_native_species_prompt(request: NativeSpeciesRequest) -> str:
    return (
        "You are a native species expert specializing in flora and fauna of global "
        "regions. Provide detailed information about native species for:\n\n"
        f"Region: {describe(request.region)}\n"
        f"Habitat Type: {describe(request.habitat, default='Mixed')}\n"
        f"Purpose: {describe(request.purpose, default='General conservation')}\n\n"
        "REQUIREMENTS:\n"
        "- Focus on species native to the specified region\n"
        "- Include both flora and fauna\n"
        "- Provide conservation status for each species\n"
        "- Include practical information for landowners and conservationists\n"
        "- Use appropriate regional terminology and scientific names\n"
        "- Consider climate adaptation and drought tolerance\n\n"
        f"Return your response as a JSON object with this exact structure:\n{_SPECIES_SHAPE}"
    )
