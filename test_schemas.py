"""
StudyMapper - Schema Tests
==========================

Context resolution, construction-time defaults and the JSON shape.
"""

import pytest
from pydantic import ValidationError

from app.schemas.mindmap import Branch, ContextType, MindMap, SubBranch


class TestContextType:

    @pytest.mark.parametrize("value, expected", [
        ("academic", ContextType.academic),
        ("  Creative ", ContextType.creative),
        ("PROFESSIONAL", ContextType.professional),
        (ContextType.academic, ContextType.academic),
        ("foo", ContextType.personal),
        ("", ContextType.personal),
        (None, ContextType.personal),
    ])
    def test_resolve(self, value, expected):
        assert ContextType.resolve(value) is expected


class TestNodeDefaults:

    def test_branch_defaults(self):
        branch = Branch(title="Cells")

        assert branch.explanation == "About Cells"
        assert branch.key_points == ("Key point",)
        assert branch.example == "Example"
        assert branch.sub_branches == ()

    def test_sub_branch_defaults(self):
        sub = SubBranch.model_validate({"title": "Nucleus", "explanation": ""})

        assert sub.explanation == "About Nucleus"
        assert sub.key_points == ("Detail",)
        assert sub.example == "Example"

    def test_explicit_empty_key_points_are_kept(self):
        sub = SubBranch.model_validate({"title": "Nucleus", "keyPoints": []})
        branch = Branch(title="Cells", key_points=[])

        assert sub.key_points == ()
        assert branch.key_points == ()

    def test_null_key_points_get_default(self):
        branch = Branch.model_validate({"title": "Cells", "keyPoints": None})
        assert branch.key_points == ("Key point",)

    def test_explicit_values_are_kept(self):
        branch = Branch.model_validate({
            "title": "Cells",
            "explanation": "Basic unit of life",
            "keyPoints": ["Have membranes"],
            "example": "Red blood cell",
        })

        assert branch.explanation == "Basic unit of life"
        assert branch.key_points == ("Have membranes",)
        assert branch.example == "Red blood cell"

    def test_string_sub_branches_are_expanded(self):
        branch = Branch.model_validate({"title": "Cells", "subBranches": ["Nucleus"]})
        sub = branch.sub_branches[0]

        assert sub.title == "Nucleus"
        assert sub.explanation == "Detail about Nucleus"
        assert sub.key_points == ("Supporting detail",)
        assert sub.example == "Example"


class TestMindMapModel:

    def test_is_immutable(self):
        mind_map = MindMap(central_idea="Cells")
        with pytest.raises(ValidationError):
            mind_map.central_idea = "Tissues"

    def test_empty_branches_are_allowed(self):
        assert MindMap(central_idea="").branches == ()

    def test_central_idea_limit(self):
        with pytest.raises(ValidationError):
            MindMap(central_idea="x" * 41)

    def test_json_uses_camel_case(self):
        mind_map = MindMap.model_validate({
            "centralIdea": "Cells",
            "branches": [{"title": "Parts", "subBranches": ["Nucleus"]}],
        })
        data = mind_map.model_dump(by_alias=True)

        assert data["centralIdea"] == "Cells"
        branch = data["branches"][0]
        assert branch["keyPoints"] == ("Key point",)
        assert branch["subBranches"][0]["title"] == "Nucleus"

    def test_structural_equality(self):
        a = MindMap.model_validate({"centralIdea": "Cells", "branches": [{"title": "Parts"}]})
        b = MindMap(central_idea="Cells", branches=(Branch(title="Parts"),))
        assert a == b
