from context_tailor.adapters.context_windows_memory import InMemoryContextWindowRegistry
from context_tailor.use_cases.budget import Budget


def test_budget_max_input_tokens():
    b = Budget(max_context_tokens=1000, reserve_output_tokens=200, safety_margin_tokens=50)
    assert b.max_input_tokens == 750


def test_budget_never_negative():
    b = Budget(max_context_tokens=100, reserve_output_tokens=200)
    assert b.max_input_tokens == 0


def test_budget_for_model_uses_registry():
    reg = InMemoryContextWindowRegistry({"tiny": 300})
    b = Budget.for_model(reg, "tiny", reserve_output_tokens=100, safety_margin_tokens=0)
    assert b.max_context_tokens == 300
    assert b.max_input_tokens == 200

    unknown = Budget.for_model(reg, "nope", reserve_output_tokens=192)
    assert unknown.max_input_tokens == 8192 - 192 - 32
