from src.data.schemas import InsightCard, InsightEvidence


class InsightExplainer:
    def explain(self, card: InsightCard) -> str:
        """
        Renders an insight card as a short markdown explanation.
        """
        priority = "Low"
        if card.rank_score > 0.75:
            priority = "Very High"
        elif card.rank_score > 0.6:
            priority = "High"
        elif card.rank_score > 0.45:
            priority = "Moderate"

        lines = [
            f"**{card.title}** ({card.severity.upper()}, {card.scope})",
            f"Why it matters: {card.why_it_matters}",
            f"Priority: {priority} ({int(card.rank_score * 100)}%)",
        ]
        if card.evidence:
            lines.append("Evidence:")
            lines.extend(f"- {self._format_evidence(e)}" for e in card.evidence)
        lines.append(f"**Recommendation**: {card.recommended_action}")
        return "\n".join(lines)

    def _format_evidence(self, evidence: InsightEvidence) -> str:
        if evidence.value is None:
            return evidence.label
        value = f"{evidence.value:g}" if isinstance(evidence.value, float) else str(evidence.value)
        unit = evidence.unit or ""
        if unit == '%':
            return f"{evidence.label}: {value}%"
        return f"{evidence.label}: {value} {unit}".rstrip()
