"""
MT700 draft generation from extracted document text.

Builds the generation prompt from the MT700 field catalogue and returns the
model's raw draft. The raw draft is untrusted; it is cleaned up by the
post-processing pipeline, not here.
"""

import logging
from typing import Any

from ..postprocessing.mt700 import FIELD_CATALOGUE
from .exceptions import AIServiceError

logger = logging.getLogger(__name__)


# =============================================================================
# Generation Prompt
# =============================================================================

GENERATION_SYSTEM_PROMPT = """You are a senior trade-finance specialist drafting documentary credits under UCP 600.
You write SWIFT MT700 messages that are precise, complete and free of commentary."""

EXAMPLE_DRAFT = """:27:1/1
:40A:IRREVOCABLE
:20:INPUT THE LC NUMBER HERE
:31C:250114
:40E:UCP LATEST VERSION
:31D:250415 IN THE COUNTRY OF THE BENEFICIARY
:50:ABC TRADING LLC
.12 HARBOUR ROAD
.DUBAI, UNITED ARAB EMIRATES
:59:XYZ MANUFACTURING CO LTD
.88 INDUSTRIAL PARK
.SHENZHEN, CHINA
:32B:USD50000,00
:41D:ANY BANK BY NEGOTIATION
:42C:AT SIGHT
:42A:ISSUING BANK
:43P:ALLOWED
:43T:PROHIBITED
:44A:SHENZHEN, CHINA
:44B:JEBEL ALI, UNITED ARAB EMIRATES
:44C:250331
:45A:500 UNITS OF INDUSTRIAL PUMPS AS PER PROFORMA INVOICE NO. PI-2291
.CFR JEBEL ALI INCOTERMS 2020
:46A:1. SIGNED COMMERCIAL INVOICE IN 3 ORIGINALS
.
.2. FULL SET OF CLEAN ON BOARD BILLS OF LADING
.
.3. CERTIFICATE OF ORIGIN
:47A:1. ALL DOCUMENTS MUST BE ISSUED IN ENGLISH
.
.2. A DISCREPANCY FEE OF USD 75 WILL BE DEDUCTED
:71D:ALL CHARGES OUTSIDE THE ISSUING BANK ARE FOR BENEFICIARY ACCOUNT
:48:21/FROM THE DATE OF SHIPMENT
:49:WITHOUT
:78:DOCUMENTS TO BE SENT TO THE ISSUING BANK IN ONE LOT
:72Z:THIS CREDIT IS SUBJECT TO UCP 600"""


def _field_catalogue_text() -> str:
    return "\n".join(f":{tag}: {name}" for tag, name in FIELD_CATALOGUE.items())


def build_generation_prompt(extracted_text: str) -> str:
    """Embed extracted document text into the MT700 generation prompt."""
    return f"""Create a documentary credit draft in SWIFT MT700 format following UCP 600 guidelines using the following extracted information:

{extracted_text}

## Fields (use exactly these tags, in this order):
{_field_catalogue_text()}

## Formatting Rules:
- Start the draft with :27: and end it with :72Z:
- Put each field tag at the start of its own line, followed immediately by its value
- Prefix every continuation line of a multi-line field with a single "."
- In :46A: and :47A: separate numbered items with a line containing only "."
- Dates are YYMMDD; amounts are <CURRENCY><AMOUNT> with a comma as decimal separator
- :20: is always "INPUT THE LC NUMBER HERE"
- :43P: and :43T: are either ALLOWED or PROHIBITED
- Write all text in upper case
- Return only the MT700 message: no introduction, no explanations, no markdown

## Example Output:
{EXAMPLE_DRAFT}"""


async def generate_raw_draft(
    extracted_text: str,
    client: Any,  # AsyncOpenAI client
    model: str = "gpt-4.1",
) -> str:
    """
    Ask the model for an MT700 draft based on extracted text.

    Args:
        extracted_text: Text extracted from the source PDF.
        client: AsyncOpenAI client instance.
        model: Model name to use.

    Returns:
        Raw draft text exactly as returned by the model.

    Raises:
        AIServiceError: If the call fails or the model returns no text.
    """
    logger.info("Generating MT700 draft from %d characters of extracted text", len(extracted_text))

    try:
        response = await client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": GENERATION_SYSTEM_PROMPT},
                {"role": "user", "content": build_generation_prompt(extracted_text)},
            ],
        )
    except Exception as e:
        raise AIServiceError(f"Draft generation failed: {e}") from e

    content = response.choices[0].message.content
    if not content or not content.strip():
        raise AIServiceError("Empty response from model during draft generation")

    logger.info("Model returned raw draft of %d characters", len(content))
    return content
