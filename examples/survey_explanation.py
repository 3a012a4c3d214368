"""
examples/survey_explanation.py
==============================
Why is "license=true" part of a survey-tool configuration?

Builds a small feature model, asks CXPlain for the minimal set of
configuration choices, requirements and model constraints that force
the sub-configuration, and prints the search statistics.
"""
import logging

from cxplain import CXPlainConfig, FeatureModel, Instrumentation
from cxplain.models import CausalExplanationModel


def build_survey_model() -> FeatureModel:
    fm = FeatureModel("survey")
    fm.add_root("survey")
    for name in ("pay", "ABtesting", "statistics", "qa",
                 "license", "nonlicense", "multiplechoice", "multiplemedia"):
        fm.add_feature(name)

    fm.add_mandatory("survey", "pay")
    fm.add_optional("survey", "ABtesting")
    fm.add_optional("survey", "statistics")
    fm.add_mandatory("survey", "qa")
    fm.add_alternative("pay", ["license", "nonlicense"])
    fm.add_or("qa", ["multiplechoice", "multiplemedia"])
    fm.add_excludes("ABtesting", "nonlicense")
    fm.add_requires("ABtesting", "statistics")
    return fm


def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s %(levelname)s %(message)s")

    model = CausalExplanationModel(
        build_survey_model(),
        sub_configuration="license=true",
        requirement="ABtesting=true",
        configuration=(
            "pay=true,nonlicense=false,ABtesting=true,statistics=true,"
            "qa=true,multiplechoice=true,multiplemedia=false"
        ),
    )
    inst = Instrumentation()
    explanation = model.explain(config=CXPlainConfig.for_profile("bounded"), instrumentation=inst)

    print("Explanation for license=true:")
    for statement in explanation:
        print(f"  - {statement}")
    print(inst.summary())

    assert "excludes(ABtesting, nonlicense)" in explanation.labels()
    print("✓ Survey explanation example passed.")


if __name__ == "__main__":
    main()
