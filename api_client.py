# api_client.py

import asyncio
import time
from typing import Dict, Optional, Union

import httpx
from pydantic import ValidationError

from config import (
    IRIS_API_BASE_URL, IRIS_API_KEY, IRIS_API_TIMEOUT, IRIS_API_MAX_RETRIES, IRIS_API_CONCURRENCY_LIMIT,
    EXPONENTIAL_BACKOFF_FACTOR, IRIS_SUBMISSION_PATH
)
from schemas import IrisSubmissionRequest, IrisSubmissionResponse
from utils import log

RETRYABLE_STATUS_CODES = {429, 502, 503, 504}


class IRISClient:
    """An async client for the IRIS shipping-instruction API."""
    def __init__(
        self,
        base_url: str = IRIS_API_BASE_URL,
        api_key: str = IRIS_API_KEY,
        max_retries: int = IRIS_API_MAX_RETRIES,
        backoff_factor: float = EXPONENTIAL_BACKOFF_FACTOR,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}
        self._client = httpx.AsyncClient(
            base_url=base_url, headers=headers, timeout=IRIS_API_TIMEOUT, transport=transport
        )
        self._max_retries = max(1, max_retries)
        self._backoff_factor = backoff_factor
        self._semaphore = asyncio.Semaphore(IRIS_API_CONCURRENCY_LIMIT)
        log.info(f"Initialized IRIS client for {base_url} with concurrency limit of {IRIS_API_CONCURRENCY_LIMIT}.")

    @staticmethod
    def _parse_response(response: httpx.Response, context: str) -> Union[IrisSubmissionResponse, Dict]:
        try:
            return IrisSubmissionResponse.model_validate_json(response.content)
        except ValidationError as e:
            log.warning(f"[{context}] IRIS response did not match the expected schema: {e}")
            return {"error": f"Unexpected IRIS response (HTTP {response.status_code})", "raw_response": response.text}

    async def submit(
        self, request: IrisSubmissionRequest, context: str
    ) -> Union[IrisSubmissionResponse, Dict]:
        """
        Posts a shipping instruction to IRIS.

        Returns the parsed IRIS response (accepted or rejected) or, when no
        usable response could be obtained after all retries, an error dict
        with an 'error' key.
        """
        async with self._semaphore:
            payload = request.model_dump(by_alias=True, mode="json", exclude_none=True)
            log.info(f"[{context}] Submitting shipping instruction '{request.shipping_instruction.booking_number}' to IRIS.")
            start_time = time.perf_counter()

            for attempt in range(self._max_retries):
                try:
                    response = await self._client.post(IRIS_SUBMISSION_PATH, json=payload)

                    if response.status_code in RETRYABLE_STATUS_CODES or response.status_code >= 500:
                        raise httpx.HTTPStatusError(
                            f"IRIS returned HTTP {response.status_code}", request=response.request, response=response
                        )

                    duration = time.perf_counter() - start_time
                    parsed = self._parse_response(response, context)
                    if isinstance(parsed, IrisSubmissionResponse):
                        log.info(f"[{context}] IRIS answered '{parsed.status}' in {duration:.2f}s "
                                 f"(HTTP {response.status_code}).")
                    return parsed

                except (httpx.TransportError, httpx.HTTPStatusError) as e:
                    log.warning(f"[{context}] Network/API error on attempt {attempt + 1}: {e}. Retrying...")
                    if attempt == self._max_retries - 1:
                        duration = time.perf_counter() - start_time
                        log.error(f"[{context}] IRIS call failed after all retries. Duration: {duration:.2f}s: {e}")
                        return {"error": f"API Error after retries: {str(e)}", "raw_response": str(e)}

                await asyncio.sleep(self._backoff_factor ** attempt)

            return {"error": "All retry attempts failed."}

    async def close(self):
        if not self._client.is_closed:
            await self._client.aclose()
            log.info("Closed IRIS AsyncClient.")
