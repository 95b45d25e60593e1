"""Named-entity skill extraction through the Hugging Face inference API."""

import re
from typing import Any, Dict, List

import requests

from .errors import EntityServiceError
from .logger import get_logger
from .normalize import dedupe_skills
from .retry import RetryError, exponential_backoff, should_retry_http_status


NER_MODEL = "Davlan/bert-base-multilingual-cased-ner-hrl"
API_URL = f"https://api-inference.huggingface.co/models/{NER_MODEL}"

MAX_INPUT_CHARS = 2000
SKILL_ENTITY_GROUPS = {"SKILL", "MISC", "ORG"}
NUMERIC_RE = re.compile(r"^[0-9]+$")


@exponential_backoff(
    max_retries=2,
    base_delay=1.0,
    exceptions=(
        requests.exceptions.Timeout,
        requests.exceptions.ConnectionError,
        requests.exceptions.HTTPError,
    ),
)
def _post_with_retry(payload: Dict[str, Any], api_key: str, timeout: float):
    """POST to the inference API, retrying transient failures."""
    resp = requests.post(
        API_URL,
        headers={"Authorization": f"Bearer {api_key}"},
        json=payload,
        timeout=timeout,
    )
    # Model cold starts answer 503; only retryable statuses raise in here
    if should_retry_http_status(resp.status_code):
        resp.raise_for_status()
    return resp


def _entity_list(data: Any) -> List[Dict[str, Any]]:
    # The API answers either [entity, ...] or [[entity, ...]]
    if not isinstance(data, list):
        raise EntityServiceError(f"Unexpected entity payload: {type(data).__name__}")
    if data and isinstance(data[0], list):
        data = data[0]
    return [item for item in data if isinstance(item, dict)]


def _is_skill_word(word: str) -> bool:
    return 2 < len(word) < 30 and not NUMERIC_RE.match(word)


def extract_entities(text: str, api_key: str, timeout: float = 15) -> List[str]:
    """
    Extract skill-like entities from text with the NER model.

    Args:
        text: Free text; only the first 2000 characters are sent
        api_key: Hugging Face API token
        timeout: Per-request timeout in seconds

    Returns:
        De-duplicated entity words in the order the model returned them

    Raises:
        EntityServiceError: On HTTP errors, timeouts or malformed payloads
    """
    logger = get_logger()
    logger.record_extraction_attempt()
    try:
        resp = _post_with_retry({"inputs": text[:MAX_INPUT_CHARS]}, api_key, timeout)
        resp.raise_for_status()
        data = resp.json()
    except RetryError as e:
        logger.record_extraction_failure("RetryExhausted")
        logger.warning("Entity service unavailable after retries", error=str(e))
        raise EntityServiceError(f"Entity service unavailable: {e}") from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "HTTPError"
        logger.record_extraction_failure(f"HTTPError_{status}")
        logger.error("Entity service request failed", status=status)
        raise EntityServiceError(f"Entity service request failed ({status})") from e
    except requests.exceptions.RequestException as e:
        logger.record_extraction_failure("RequestException")
        logger.error("Entity service request error", error=str(e))
        raise EntityServiceError(f"Entity service request error: {e}") from e
    except ValueError as e:
        logger.record_extraction_failure("InvalidJSON")
        raise EntityServiceError("Entity service returned invalid JSON") from e

    try:
        entities = _entity_list(data)
    except EntityServiceError:
        logger.record_extraction_failure("InvalidPayload")
        raise

    words = []
    for item in entities:
        if item.get("entity_group") not in SKILL_ENTITY_GROUPS:
            continue
        word = str(item.get("word") or "").strip()
        if _is_skill_word(word):
            words.append(word)

    logger.debug("Entity extraction complete", entities=len(entities), skills=len(words))
    return dedupe_skills(words)
