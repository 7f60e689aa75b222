"""Prompt templates for investability analysis."""

from typing import Any

from osake_mcp.engine.ticker import normalize

# Prompt definitions
PROMPTS = {
    "investability_memo": {
        "description": "Investability memo for a Helsinki-listed stock",
        "arguments": [{"name": "symbol", "required": True}],
    },
    "sector_memo": {
        "description": "How a Helsinki stock stacks up against its sector",
        "arguments": [{"name": "symbol", "required": True}],
    },
}


def list_prompts() -> list[dict[str, Any]]:
    """List available prompts."""
    return [
        {
            "name": name,
            "description": info["description"],
            "arguments": info["arguments"],
        }
        for name, info in PROMPTS.items()
    ]


def get_prompt(name: str, arguments: dict[str, str]) -> dict[str, Any] | None:
    """
    Get a prompt by name with arguments filled in.

    Returns dict with 'messages' key for MCP GetPromptResult.
    """
    if name not in PROMPTS:
        return None

    symbol = normalize(arguments.get("symbol", ""))

    if name == "investability_memo":
        return {
            "messages": [
                {
                    "role": "user",
                    "content": f"""Write an investability memo for {symbol}.

Use these tools in order:
1. get_fundamentals("{symbol}")
2. get_score("{symbol}")
3. compare_sector("{symbol}")

Then provide:
1. **Score**: Total and rating, then each category with its band
2. **Valuation**: P/E, PEG, P/B, P/FCF against the sector averages
3. **Quality and growth**: ROE and EBIT-% trend, average revenue and EPS growth
4. **Solvency**: Equity ratio, net debt ratio, dividend yield
5. **Data caveats**: If data_provenance.fundamentals.fallback_used is true,
   say the figures are static sample data and quote api_error when present

Use "—" for missing values, never 0.""",
                }
            ]
        }

    if name == "sector_memo":
        return {
            "messages": [
                {
                    "role": "user",
                    "content": f"""Compare {symbol} with its sector.

Use these tools:
1. compare_sector("{symbol}")
2. get_benchmarks()

Then provide:
1. **Where it beats the sector**: metrics with better=true
2. **Where it lags**: metrics with better=false
3. **P/E ladder**: stock vs sector vs Helsinki market average
4. **Summary**: One sentence

Be direct.""",
                }
            ]
        }

    return None
