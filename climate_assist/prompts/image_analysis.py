from __future__ import annotations


IMAGE_ANALYSIS_PROMPT = """You are a global environmental analyst. Analyze this image for environmental impact with a focus on sustainable living worldwide. Identify the main object and provide a JSON response with:

1. Item category (focus on: farm_equipment, water_tank, solar_panel, generator, household_item, native_plant, building_material, etc.)
2. Estimated carbon footprint in kg CO2 (consider global supply chains and distances)
3. Three eco-friendly alternatives with carbon reduction potential
4. Confidence level (0-100)

For alternatives, prioritize:
- Local retailer availability
- Drought-resistant options
- Solar/off-grid solutions
- Local suppliers
- Indigenous materials where appropriate

Return ONLY valid JSON in this exact format:
{
  "item_category": "string",
  "carbon_footprint": number,
  "alternatives": [
    {
      "name": "string",
      "carbon_reduction": number,
      "description": "string (mention local suppliers/context)",
      "difficulty": "easy|medium|hard"
    }
  ],
  "confidence": number
}"""


def build_image_analysis_prompt(_request=None) -> str:
    return IMAGE_ANALYSIS_PROMPT
