"""Prompt templates for valuation and dividend analysis."""

from typing import Any

# Prompt definitions
PROMPTS = {
    "value_memo": {
        "description": "Graham/Bazin value investment memo",
        "arguments": [{"name": "symbol", "required": True}],
    },
    "dividend_income_memo": {
        "description": "Dividend income assessment with payment calendar",
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

    Returns dict with 'messages' key for MCP GetPromptResult, or None for
    unknown prompt names.
    """
    if name not in PROMPTS:
        return None

    symbol = arguments.get("symbol", "")

    if name == "value_memo":
        content = f"""Write a value investment memo for {symbol}.

Use these tools:
1. get_valuation_analysis("{symbol}")
2. get_buy_and_hold_checklist("{symbol}")

Then provide:
1. **Graham**: Fair price vs current price, margin of safety (undervalued needs >= 10%)
2. **Bazin**: Ceiling price at a 6% target yield and whether price is below it
3. **Dividends**: Consistency score, growth rate (CAGR), payout sustainability
4. **Checklist**: Score and failed criteria; call out criteria listed as unavailable
5. **Action**: Buy / Wait / Pass with specific reasoning

If fair_price or ceiling_price is 0, say the formula does not apply (e.g. negative
earnings or no dividends) instead of treating it as a valuation.

Be direct. No hedging."""
    else:
        content = f"""Assess {symbol} as a dividend income holding.

Use these tools:
1. get_dividends("{symbol}")
2. get_dividend_radar("{symbol}")
3. project_dividend_income("{symbol}")

Then provide:
1. **History**: Average annual dividend, years paid, growth rate
2. **Calendar**: Months with historical payments and their share of all payments
   (these are past frequencies, not predictions)
3. **Projection**: Next years at the historical growth rate, with caveats
4. **Verdict**: Reliable / Irregular / Unreliable income source, and why"""

    return {"messages": [{"role": "user", "content": content}]}
