from typing import Any, Dict

import yaml
from loguru import logger

from discharge_ingest.commons.discharge_normalizer import DischargeNormalizer
from discharge_ingest.commons.types import ParserCfg
from discharge_ingest.helpers.pdf_text import document_to_text
from discharge_ingest.parsers.models import ParseResult


class DischargeEngine:
    """Engine facade that loads config and exposes parse/map methods.
    Accepts a YAML path, an already loaded settings dict, or nothing (defaults).
    """

    def __init__(self, config_path_or_obj: Any = None):
        if isinstance(config_path_or_obj, str):
            with open(config_path_or_obj, "r", encoding="utf-8") as f:
                self.cfg = yaml.safe_load(f) or {}
        elif isinstance(config_path_or_obj, dict):
            self.cfg = config_path_or_obj
        else:
            self.cfg = {}

        self.parser_cfg = ParserCfg.model_validate(self.cfg.get("parser") or {})
        self.normalizer = DischargeNormalizer(self.parser_cfg)

    @property
    def outcomes(self):
        return self.parser_cfg.outcomes

    def normalize(self, text: str) -> ParseResult:
        result = self.normalizer.normalize(text)
        low = [r for r in result.records if r.confidence < 1.0]
        logger.debug(
            f"Parsed {len(result.records)} record(s) from '{result.facility_name}' "
            f"({len(low)} below full confidence)"
        )
        return result

    def to_payload(self, norm: ParseResult) -> Dict:
        return self.normalizer.to_payload(norm)

    def parse_and_map(self, text: str) -> Dict:
        return self.to_payload(self.normalize(text))

    def parse_document(self, data: bytes) -> ParseResult:
        return self.normalize(document_to_text(data))
