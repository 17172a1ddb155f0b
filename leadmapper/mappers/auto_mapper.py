"""
Auto field mapper

Suggests a FieldMapping from the headers of French and English lead
exports. Suggestions only: the operator can always edit the result.
"""

from typing import Dict, List, Optional, Sequence

from core.models import FieldKind, FieldMapping


# Exact header matches (lowercased, trimmed), applied first.
# "nom" and "prénom" both feed the name field, in header order; other
# fields take the first matching header.
EXACT_HEADERS: Dict[str, FieldKind] = {
    'nom': FieldKind.NAME,
    'prénom': FieldKind.NAME,
    'prenom': FieldKind.NAME,
    'name': FieldKind.NAME,
    'full name': FieldKind.NAME,
    'adresse complète': FieldKind.ADDRESS,
    'adresse complete': FieldKind.ADDRESS,
    'adresse': FieldKind.ADDRESS,
    'address': FieldKind.ADDRESS,
    'code postal': FieldKind.POSTAL_CODE,
    'postal code': FieldKind.POSTAL_CODE,
    'ville': FieldKind.CITY,
    'city': FieldKind.CITY,
    'mobile': FieldKind.PHONE,
    'téléphone': FieldKind.PHONE,
    'telephone': FieldKind.PHONE,
    'phone': FieldKind.PHONE,
}

# Keyword substrings, tried only for fields still unmapped (first header wins)
FIELD_KEYWORDS: Dict[FieldKind, List[str]] = {
    FieldKind.NAME: ['nom', 'name', 'prénom', 'prenom', 'client', 'contact'],
    FieldKind.PHONE: ['tel', 'phone', 'téléphone', 'telephone', 'mobile', 'portable'],
    FieldKind.ADDRESS: ['adresse', 'address', 'rue', 'street', 'addr'],
    FieldKind.POSTAL_CODE: ['postal', 'zip', 'cp'],
    FieldKind.CITY: ['ville', 'city', 'commune', 'localité', 'localite'],
}


class AutoMapper:
    """
    Automatically detect field mappings from source headers.

    Example:
        mapper = AutoMapper()
        mapping = mapper.suggest(["Nom", "Prénom", "Mobile", "Ville"])
        mapping.name  # ('Nom', 'Prénom')
    """

    def __init__(self, custom_keywords: Optional[Dict[str, List[str]]] = None):
        """
        Initialize auto mapper.

        Args:
            custom_keywords: Optional {field: [keywords]} merged ahead of the defaults
        """
        self.keywords = {kind: list(words) for kind, words in FIELD_KEYWORDS.items()}

        if custom_keywords:
            for field_name, words in custom_keywords.items():
                kind = FieldKind.parse(field_name)
                self.keywords[kind] = [w.lower() for w in words] + self.keywords[kind]

    def suggest(self, headers: Sequence[str]) -> FieldMapping:
        """
        Suggest a mapping for one table.

        A header is never suggested for two fields.
        """
        mapping = FieldMapping()

        for header in headers:
            kind = EXACT_HEADERS.get(header.strip().lower())
            if kind is None or mapping.is_header_mapped(header):
                continue
            if kind is not FieldKind.NAME and mapping.headers_for(kind):
                continue
            mapping = mapping.add(kind, header)

        for kind, words in self.keywords.items():
            if mapping.headers_for(kind):
                continue
            for header in headers:
                if mapping.is_header_mapped(header):
                    continue
                lowered = header.strip().lower()
                if any(word in lowered for word in words):
                    mapping = mapping.add(kind, header)
                    break

        return mapping

    def get_mapping_confidence(self, mapping: FieldMapping) -> float:
        """
        Confidence score for the mapping (0.0 to 1.0).

        Name and phone weigh 0.3 each, the three address fields 0.4 together.
        """
        score = 0.0
        for kind in (FieldKind.NAME, FieldKind.PHONE):
            if mapping.headers_for(kind):
                score += 0.3

        location = [FieldKind.ADDRESS, FieldKind.POSTAL_CODE, FieldKind.CITY]
        mapped_location = sum(1 for kind in location if mapping.headers_for(kind))
        score += (mapped_location / len(location)) * 0.4

        return min(round(score, 2), 1.0)

    def get_mapping_summary(self, mapping: FieldMapping) -> Dict[str, str]:
        """Dict of {field: "Header A + Header B"} for mapped fields."""
        return {
            kind.value: ' + '.join(mapping.headers_for(kind))
            for kind in mapping.mapped_kinds()
        }
