# rag.py — in-process knowledge base (reference implementation of the store contract)

import math, re, uuid
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

_TOKEN_RE = re.compile(r"[A-Za-z0-9']+")

def _tokens(text):           # very cheap word tokenizer
    return [w.lower() for w in _TOKEN_RE.findall(text)]

def _tfidf_vector(doc_tokens, idf):
    counts = Counter(doc_tokens)
    return {t: counts[t] * idf.get(t, 0.0) for t in counts}

def _cosine(a, b):
    if not a or not b:
        return 0.0
    num = sum(a[t] * b.get(t, 0.0) for t in a)
    den = math.sqrt(sum(v*v for v in a.values())) * math.sqrt(sum(v*v for v in b.values()))
    return num / den if den else 0.0


@dataclass
class KnowledgeEntry:
    id: str
    text: str
    embedding: Optional[List[float]]
    source_type: str
    source_metadata: Dict = field(default_factory=dict)


class KnowledgeBase:
    """
    Keeps whatever the ingestion pipeline hands over via `add` and answers
    TF-IDF similarity queries. The embedding is stored, not used.
    """

    def __init__(self):
        self.entries: Dict[str, KnowledgeEntry] = {}
        self._tokens: Dict[str, List[str]] = {}
        self._df = Counter()

    def __len__(self):
        return len(self.entries)

    def add(self, text, embedding=None, source_type="website", source_metadata=None) -> str:
        doc_id = uuid.uuid4().hex
        self.entries[doc_id] = KnowledgeEntry(doc_id, text, embedding, source_type,
                                              dict(source_metadata or {}))
        toks = _tokens(text)
        self._tokens[doc_id] = toks
        self._df.update(set(toks))
        return doc_id

    def get(self, doc_id) -> Optional[KnowledgeEntry]:
        return self.entries.get(doc_id)

    def _idf(self):
        n = len(self._tokens) or 1
        return {t: math.log(n / (1 + df)) + 1.0 for t, df in self._df.items()}

    def similarity_search(self, query, k=5) -> List[Tuple[str, float]]:
        idf = self._idf()
        q_vec = _tfidf_vector(_tokens(query), idf)
        scored = []
        for doc_id, toks in self._tokens.items():
            doc_vec = _tfidf_vector(toks, idf)
            if doc_vec:                      # skip empty vectors
                scored.append((doc_id, _cosine(doc_vec, q_vec)))
        return sorted(scored, key=lambda x: x[1], reverse=True)[:k]
