"""Unit tests for class-list extraction and file scanning."""

from tw2panda.collectors import (
    SKIP_DIRS,
    ClassListMatch,
    RegexClassExtractor,
    collect_files,
    split_classes,
)


class TestRegexClassExtractor:
    """Tests for the default regex extractor."""

    def test_class_attributes(self):
        """Test class= and className= with either quote style."""
        content = "<div class=\"flex p-4\"></div>\n<span className='text-sm'></span>"
        matches = RegexClassExtractor().extract(content)
        assert [m.raw_text for m in matches] == ["flex p-4", "text-sm"]
        assert [m.line for m in matches] == [1, 2]

    def test_template_literal_and_tagged_template(self):
        """Test className={`...`} and tw`...`."""
        content = "const a = <div className={`flex gap-2`} />;\nconst b = tw`p-2 m-1`;"
        matches = RegexClassExtractor().extract(content)
        assert [m.classes for m in matches] == [["flex", "gap-2"], ["p-2", "m-1"]]

    def test_helper_calls(self):
        """Test clsx/cn/cx/cva string arguments."""
        content = 'clsx("a b")\ncn( "c" )\ncx(\'d\')\ncva("e f")'
        matches = RegexClassExtractor().extract(content)
        assert [m.raw_text for m in matches] == ["a b", "c", "d", "e f"]

    def test_matches_ordered_by_position(self):
        """Test results from different patterns are ordered by span."""
        content = 'tw`first`\n<div class="second"></div>\ncn("third")'
        matches = RegexClassExtractor().extract(content)
        assert [m.raw_text for m in matches] == ["first", "second", "third"]
        assert all(content[m.span[0] : m.span[1]] == m.raw_text for m in matches)

    def test_extraction_is_repeatable(self):
        """Test extracting twice yields equal results."""
        extractor = RegexClassExtractor()
        content = '<div class="flex"></div>'
        assert extractor.extract(content) == extractor.extract(content)

    def test_no_matches(self):
        """Test files without class lists yield nothing."""
        assert RegexClassExtractor().extract("export const x = 1;") == []

    def test_interpolation_debris_dropped(self):
        """Test template interpolation fragments are not classes."""
        assert split_classes("flex ${active} {cond} p-4") == ["flex", "p-4"]
        match = ClassListMatch(raw_text="  a\tb\n c ", span=(0, 10), line=1)
        assert match.classes == ["a", "b", "c"]
        assert match.to_dict() == {"raw_text": "  a\tb\n c ", "span": [0, 10], "line": 1}


class TestCollectFiles:
    """Tests for collect_files."""

    def test_default_include_and_skip_dirs(self, sample_project):
        """Test default patterns pick source files and skip build folders."""
        files = collect_files(sample_project)
        names = sorted(p.name for p in files)
        assert names == ["Button.tsx", "Card.tsx", "DangerButton.tsx", "empty.ts", "index.html"]
        assert not any(part in SKIP_DIRS for p in files for part in p.parts)

    def test_custom_include(self, sample_project):
        """Test gitignore-style include patterns."""
        files = collect_files(sample_project, include=["src/*.html"])
        assert [p.name for p in files] == ["index.html"]

    def test_exclude(self, sample_project):
        """Test exclude patterns drop matching files."""
        files = collect_files(sample_project, exclude=["*Button.tsx", "# comment"])
        assert sorted(p.name for p in files) == ["Card.tsx", "empty.ts", "index.html"]

    def test_empty_include(self, sample_project):
        """Test an empty include list selects nothing."""
        assert collect_files(sample_project, include=[]) == []

    def test_results_sorted_and_absolute(self, sample_project):
        """Test paths are absolute and sorted."""
        files = collect_files(sample_project)
        assert files == sorted(files)
        assert all(p.is_absolute() for p in files)
