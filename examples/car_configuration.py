"""
examples/car_configuration.py
=============================
Explaining "easy-parking=y" in the car configuration knowledge base,
with recursion tracing switched on.
"""
import logging

from cxplain import CXPlainConfig
from cxplain.models import CausalExplanationModel, car_configuration_kb


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(message)s")

    model = CausalExplanationModel(
        car_configuration_kb(),
        sub_configuration="easy-parking=y",
        requirement="biz-park=y,rec-park=y",
        configuration="biz-park=y,rec-park=y,video=y,sensor=n,GSM-radio=y,easy-parking=y,free-com=y",
    )
    explanation = model.explain(config=CXPlainConfig.for_profile("debug"))
    print(f"Explanation: {explanation}")

    assert explanation.labels() == [
        "rec-park=y [copied]",
        "(video or sensor) <-> easy-parking",
        "rec-park <-> video",
    ]
    print("✓ Car configuration example passed.")


if __name__ == "__main__":
    main()
