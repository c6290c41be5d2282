"""Structured output parsing for language model responses."""

import json
import logging
import re
from typing import Any, Dict, Generic, Type, TypeVar

from pydantic import BaseModel, ValidationError

from forecast_announcer.errors import ParseError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Closing fence is optional; truncated output may end inside the block
FENCED_BLOCK = re.compile(r"```(?:json)?(.*?)(?:```|\Z)", re.DOTALL)

FORMAT_INSTRUCTIONS = """You must format your output as a JSON value that adheres to a given "JSON Schema" instance.

"JSON Schema" is a declarative language that allows you to annotate and validate JSON documents.

For example, the example "JSON Schema" instance {{"properties": {{"foo": {{"description": "a list of test words", "type": "array", "items": {{"type": "string"}}}}}}, "required": ["foo"]}}
would match an object with one required property, "foo". The "type" property specifies "foo" must be an "array", and the "description" property semantically says it must be "a list of test words". The items within "foo" must be strings.
Thus, the object {{"foo": ["bar", "baz"]}} is a well-formatted instance of this example "JSON Schema". The object {{"properties": {{"foo": ["bar", "baz"]}}}} is not well-formatted.

Your output will be parsed and type-checked according to the provided schema instance, so make sure all fields in your output match the schema exactly and there are no trailing commas!

Here is the JSON Schema instance your output must adhere to. Include the enclosing markdown codeblock:
```json
{schema}
```
"""


def _strip_titles(schema: Dict[str, Any]) -> Dict[str, Any]:
    """Drop pydantic's generated titles, which only add noise to the prompt."""
    stripped = {key: value for key, value in schema.items() if key != "title"}
    if "properties" in stripped:
        stripped["properties"] = {
            name: _strip_titles(prop) for name, prop in stripped["properties"].items()
        }
    return stripped


class StructuredOutputParser(Generic[ModelT]):
    """Parses model output into a pydantic model.

    The parser also produces the format instructions that tell the model which
    JSON shape to answer with, so prompt and parser always agree.
    """

    def __init__(self, model: Type[ModelT]):
        self.model = model
        self.schema = _strip_titles(model.model_json_schema())

    def get_format_instructions(self) -> str:
        """Instructions describing the expected output format."""
        return FORMAT_INSTRUCTIONS.format(schema=json.dumps(self.schema))

    def parse(self, text: str) -> ModelT:
        """Parse model output.

        Args:
            text: Raw model output, usually holding a fenced JSON block

        Returns:
            Validated model instance

        Raises:
            ParseError: If the output is not valid JSON or does not match the schema
        """
        match = FENCED_BLOCK.search(text) if "```" in text else None
        candidate = match.group(1) if match else text

        try:
            data = json.loads(candidate.strip(), strict=False)
            return self.model.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Failed to parse model output: {e}")
            raise ParseError(f"Failed to parse. Text: \"{text}\". Error: {e}", text=text) from e
