"""Tests for the namesync CLI."""

import os

from conftest import listing, make_tree
from namesync.cli import main


class TestSync:
    def test_renames_and_copies(self, runner, src, tgt):
        make_tree(src, {"Report_2024.txt": "", "NewFile.txt": "n", "sub/a1.txt": ""})
        make_tree(tgt, {"Report.txt": "r", "sub/a.txt": ""})

        result = runner.invoke(main, ["sync", str(src), str(tgt)])

        assert result.exit_code == 0, result.output
        assert listing(tgt) == {"Report_2024.txt", "NewFile.txt", "sub/a1.txt"}
        assert "Renamed 2, copied 1, created 0 directories; 0 collision(s)." in result.output

    def test_resolves_collisions_with_postfix(self, runner, src, tgt):
        make_tree(src, {"ab.txt": "", "abc.txt": "", "abcd.txt": "s"})
        make_tree(tgt, {"a.txt": "", "a-b.txt": ""})

        result = runner.invoke(main, ["sync", str(src), str(tgt), "-p", "dup"])

        assert result.exit_code == 0, result.output
        assert listing(tgt) == {"abcd dup.txt", "abc dup.txt", "ab dup.txt"}
        assert "3 collision(s)" in result.output

    def test_postfix_from_environment(self, runner, src, tgt):
        make_tree(src, {"ab.txt": ""})
        make_tree(tgt, {"a.txt": "", "a-b.txt": ""})
        result = runner.invoke(main, ["sync", str(src), str(tgt)],
                               env={"NAMESYNC_POSTFIX": "envfix"})
        assert result.exit_code == 0, result.output
        assert "ab envfix.txt" in listing(tgt)

    def test_dry_run_prints_plan_only(self, runner, src, tgt):
        make_tree(src, {"Report_2024.txt": "", "new/x.txt": ""})
        make_tree(tgt, {"Report.txt": ""})

        result = runner.invoke(main, ["sync", str(src), str(tgt), "--dry-run"])

        assert result.exit_code == 0, result.output
        assert listing(tgt) == {"Report.txt"}
        assert not (tgt / "new").exists()
        assert f"~ {tgt / 'Report.txt'} -> {tgt / 'Report_2024.txt'}" in result.output
        assert f"d {os.path.join(str(tgt), 'new')}" in result.output
        assert f"+ {os.path.join(str(src), 'new', 'x.txt')} -> " in result.output
        assert "Would rename 1, copy 1, create 1 directory" in result.output

    def test_backup_created_before_sync(self, runner, src, tgt, tmp_path):
        make_tree(src, {"Report_2024.txt": ""})
        make_tree(tgt, {"Report.txt": "orig"})
        backup = tmp_path / "bak"

        result = runner.invoke(main, ["-v", "sync", str(src), str(tgt), "-b", str(backup)])

        assert result.exit_code == 0, result.output
        assert (backup / "Report.txt").read_text() == "orig"
        assert listing(tgt) == {"Report_2024.txt"}
        assert "Backup created" in result.output

    def test_backup_skipped_on_dry_run(self, runner, src, tgt, tmp_path):
        make_tree(src, {"a.txt": ""})
        backup = tmp_path / "bak"
        result = runner.invoke(main, ["sync", str(src), str(tgt), "-n", "-b", str(backup)])
        assert result.exit_code == 0, result.output
        assert not backup.exists()

    def test_exclude_option(self, runner, src, tgt):
        make_tree(src, {"a.txt": "", "b.tmp": ""})
        result = runner.invoke(main, ["sync", str(src), str(tgt), "--exclude", "*.tmp"])
        assert result.exit_code == 0, result.output
        assert listing(tgt) == {"a.txt"}

    def test_progress_bar_with_delay(self, runner, src, tgt):
        make_tree(src, {"a.txt": "", "b.txt": ""})
        result = runner.invoke(main, ["sync", str(src), str(tgt), "--progress", "--delay", "1"])
        assert result.exit_code == 0, result.output
        assert "Processed" in result.output

    def test_verbose_status(self, runner, src, tgt):
        make_tree(src, {"a.txt": "", ".DS_Store": ""})
        result = runner.invoke(main, ["-v", "sync", str(src), str(tgt), "--no-progress"])
        assert result.exit_code == 0, result.output
        assert "Files detected (source): 1" in result.output
        assert "Collisions found: 0" in result.output
        assert "Synchronization completed" in result.output


class TestSyncErrors:
    def test_empty_postfix(self, runner, src, tgt):
        result = runner.invoke(main, ["sync", str(src), str(tgt), "-p", ""])
        assert result.exit_code == 1
        assert "postfix" in result.output

    def test_missing_source(self, runner, tmp_path, tgt):
        result = runner.invoke(main, ["sync", str(tmp_path / "nope"), str(tgt)])
        assert result.exit_code != 0

    def test_conflict_fails_by_default(self, runner, src, tgt):
        make_tree(src, {"ab.txt": ""})
        make_tree(tgt, {"a.txt": "", "a-b.txt": "", "ab p.txt": "keep"})
        result = runner.invoke(main, ["sync", str(src), str(tgt), "-p", "p"])
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert (tgt / "ab p.txt").read_text() == "keep"

    def test_conflict_number(self, runner, src, tgt):
        make_tree(src, {"ab.txt": ""})
        make_tree(tgt, {"a.txt": "", "a-b.txt": "", "ab p.txt": "keep"})
        result = runner.invoke(main, ["sync", str(src), str(tgt), "-p", "p",
                                      "--on-conflict", "number"])
        assert result.exit_code == 0, result.output
        assert "ab p 2.txt" in listing(tgt)


    def test_copy_onto_claimed_target_refused(self, runner, src, tgt):
        make_tree(src, {"a.md": "", "a.txt": "src"})
        make_tree(tgt, {"a.txt": "EDITED"})
        result = runner.invoke(main, ["sync", str(src), str(tgt)])
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert (tgt / "a.txt").read_text() == "EDITED"

    def test_copy_onto_claimed_target_numbered(self, runner, src, tgt):
        make_tree(src, {"a.md": "", "a.txt": "src"})
        make_tree(tgt, {"a.txt": "EDITED"})
        result = runner.invoke(main, ["sync", str(src), str(tgt), "--on-conflict", "number"])
        assert result.exit_code == 0, result.output
        assert (tgt / "a.txt").read_text() == "EDITED"
        assert (tgt / "a 2.txt").read_text() == "src"

    def test_exclude_help_mentions_name_matching(self, runner):
        result = runner.invoke(main, ["sync", "--help"])
        assert result.exit_code == 0
        assert "bare" in result.output


class TestCollisionsCommand:
    def test_lists_candidates_without_writing(self, runner, src, tgt):
        make_tree(src, {"ab.txt": "", "new.txt": ""})
        make_tree(tgt, {"a.txt": "", "a-b.txt": ""})

        result = runner.invoke(main, ["collisions", str(src), str(tgt)])

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[0] == str(src / "ab.txt")
        assert lines[1] == f"  {tgt / 'a-b.txt'}"
        assert lines[2] == f"  {tgt / 'a.txt'}"
        assert listing(tgt) == {"a.txt", "a-b.txt"}

    def test_no_collisions(self, runner, src, tgt):
        make_tree(src, {"a.txt": ""})
        result = runner.invoke(main, ["collisions", str(src), str(tgt)])
        assert result.exit_code == 0
        assert "No collisions." in result.output
