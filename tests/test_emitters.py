import base64
import html
import io
import re
import unittest
import zipfile
import zlib

from docx import Document

from sample_sop import GENERATED_AT, long_sop_dict, sop_dict

from sopify.export.emitters import (
    DocxEmitter,
    HtmlEmitter,
    PdfEmitter,
    TextEmitter,
    get_emitter,
)
from sopify.export.emitters.text_emitter import DIVIDER
from sopify.export.policy import COMPLETION_MARKER
from sopify.export.sections import build_plan
from sopify.models.sop import SOP, CompletedStepSet

COMPLETED = ["step_1", "prev_2"]


def make_plan(data=None, completed=COMPLETED):
    return build_plan(SOP.from_dict(data or sop_dict()), CompletedStepSet.of(completed), generated_at=GENERATED_AT)


def pdf_strings(body):
    """Strings drawn with Tj, in page order, from every content stream."""
    found = []
    for params, data in re.findall(rb"<<([^<>]*)>>\s*stream\r?\n(.*?)endstream", body, re.S):
        if b"/ASCII85Decode" in params:
            data = data.strip()
            if data.endswith(b"~>"):
                data = data[:-2]
            data = base64.a85decode(data)
        if b"/FlateDecode" in params:
            data = zlib.decompressobj().decompress(data)
        for raw in re.findall(rb"\(((?:[^()\\]|\\.)*)\)\s*Tj", data):
            found.append(raw.decode("latin-1"))
    return found


def step_titles(strings):
    return [s for s in strings if re.match(r"(STEP|PREVENTION) \d+: ", s)]


def completed_titles(strings):
    """Step title each COMPLETED tag follows."""
    marked, current = [], None
    for s in strings:
        if re.match(r"(STEP|PREVENTION) \d+: ", s):
            current = s
        elif s == "COMPLETED":
            marked.append(current)
    return marked


def unequal_sop_dict():
    def make(prefix, label, n):
        return [{"id": f"{prefix}_{i}", "title": f"{label} {i}", "description": "Do it"} for i in range(1, n + 1)]

    return sop_dict(immediateSteps=make("step", "Respond", 5), preventiveActions=make("prev", "Prevent", 2))


class TextEmitterTest(unittest.TestCase):
    def setUp(self):
        self.plan = make_plan()
        self.text = TextEmitter().render(self.plan)

    def test_structure(self):
        self.assertTrue(self.text.startswith("STANDARD OPERATING PROCEDURE\nSOP: Server Down Response Procedure"))
        self.assertEqual(self.text.count(DIVIDER), len(self.plan.sections))
        self.assertTrue(self.text.endswith("Generated by sopify Enterprise Operations Platform"))

    def test_step_block(self):
        self.assertIn(
            "STEP 2: Restart Server\n"
            "   Action Required: Restart the affected host\n"
            "   Responsible: Technical Team\n"
            "   Duration: 10 min\n"
            "   Priority: HIGH",
            self.text,
        )

    def test_markers(self):
        self.assertEqual(self.text.count(COMPLETION_MARKER), 2)

    def test_payload(self):
        payload = TextEmitter().export(self.plan)
        self.assertTrue(payload.is_text)
        self.assertEqual(payload.filename, "sop_server_down_response_procedure.txt")


class HtmlEmitterTest(unittest.TestCase):
    def setUp(self):
        self.plan = make_plan()
        self.html = HtmlEmitter().render(self.plan)
        self.text = TextEmitter().render(self.plan)

    def test_same_step_content_as_text(self):
        for card in self.plan.step_cards:
            for value in (card.heading, card.description, card.responsible, card.duration, card.priority):
                self.assertIn(value, self.text)
                self.assertIn(html.escape(value), self.html, value)

    def test_markers_and_checkboxes(self):
        self.assertEqual(self.html.count(COMPLETION_MARKER), 2)
        self.assertEqual(self.html.count('class="step-checkbox" checked'), 2)
        self.assertEqual(self.html.count('class="step-checkbox"'), 6)

    def test_copy_button_wired(self):
        self.assertIn("function copySOPToClipboard()", self.html)
        self.assertIn('data-step-key="immediate-1"', self.html)
        self.assertIn('data-step-key="preventive-1"', self.html)

    def test_escapes_user_text(self):
        data = sop_dict(title="SOP: <script>alert(1)</script>")
        out = HtmlEmitter().render(make_plan(data))
        self.assertNotIn("<script>alert(1)</script>", out)

    def test_content_type(self):
        payload = HtmlEmitter().export(self.plan)
        self.assertTrue(payload.content_type.startswith("text/html"))
        self.assertTrue(payload.filename.endswith(".html"))


class PdfEmitterTest(unittest.TestCase):
    def test_pdf_bytes(self):
        body = PdfEmitter().render(make_plan())
        self.assertTrue(body.startswith(b"%PDF"))

    def test_idempotent(self):
        plan = make_plan()
        self.assertEqual(PdfEmitter().render(plan), PdfEmitter().render(plan))

    def test_completion_changes_output(self):
        self.assertNotEqual(PdfEmitter().render(make_plan(completed=[])), PdfEmitter().render(make_plan()))

    def test_long_sop_paginates_within_bounds(self):
        emitter = PdfEmitter()
        emitter.render(make_plan(long_sop_dict()))
        layout = emitter.layout

        self.assertGreater(emitter.page_count, 2)
        self.assertEqual(emitter.page_count, layout.page_count)
        for page, top in layout.origins:
            self.assertLessEqual(top, layout.bottom_limit)
            self.assertLessEqual(page, layout.page_count)

    def test_completed_tag_only_on_completed_steps(self):
        strings = pdf_strings(PdfEmitter().render(make_plan()))
        self.assertEqual(completed_titles(strings), ["STEP 1: Assess Impact", "PREVENTION 2: Memory Alerts"])
        self.assertEqual(completed_titles(pdf_strings(PdfEmitter().render(make_plan(completed=[])))), [])

    def test_numbering_with_unequal_lists(self):
        strings = pdf_strings(PdfEmitter().render(make_plan(unequal_sop_dict(), completed=["step_5"])))
        self.assertEqual(step_titles(strings), [
            "STEP 1: Respond 1",
            "STEP 2: Respond 2",
            "STEP 3: Respond 3",
            "STEP 4: Respond 4",
            "STEP 5: Respond 5",
            "PREVENTION 1: Prevent 1",
            "PREVENTION 2: Prevent 2",
        ])
        self.assertEqual(completed_titles(strings), ["STEP 5: Respond 5"])

    def test_non_latin_text_renders(self):
        data = sop_dict(title="SOP: 服务器宕机 ✓")
        self.assertTrue(PdfEmitter().render(make_plan(data)).startswith(b"%PDF"))


class DocxEmitterTest(unittest.TestCase):
    def setUp(self):
        self.plan = make_plan()
        self.doc = Document(io.BytesIO(DocxEmitter().render(self.plan)))
        self.paragraphs = [p.text for p in self.doc.paragraphs]

    def test_step_headings(self):
        for card in self.plan.step_cards:
            self.assertIn(card.heading, self.paragraphs)
        marked = [p for p in self.paragraphs if COMPLETION_MARKER in p]
        self.assertEqual(len(marked), 2)

    def test_sections_present(self):
        for section in self.plan.sections:
            self.assertIn(section.title, self.paragraphs)

    def test_properties_and_footer(self):
        self.assertEqual(self.doc.core_properties.title, self.plan.title)
        footer = self.doc.sections[0].footer.paragraphs[0].text
        self.assertIn("Classification: HIGH", footer)

    def test_idempotent(self):
        self.assertEqual(DocxEmitter().render(self.plan), DocxEmitter().render(self.plan))

    def test_entries_dated_by_generation_time(self):
        with zipfile.ZipFile(io.BytesIO(DocxEmitter().render(self.plan))) as archive:
            stamps = {info.date_time for info in archive.infolist()}
        self.assertEqual(stamps, {(2024, 1, 15, 15, 0, 0)})

    def test_numbering_with_unequal_lists(self):
        doc = Document(io.BytesIO(DocxEmitter().render(make_plan(unequal_sop_dict(), completed=[]))))
        headings = [p.text for p in doc.paragraphs if re.match(r"(STEP|PREVENTION) \d+: ", p.text)]
        self.assertEqual(headings, [f"STEP {i}: Respond {i}" for i in range(1, 6)]
                         + [f"PREVENTION {i}: Prevent {i}" for i in range(1, 3)])


class EmitterFactoryTest(unittest.TestCase):
    def test_known_formats(self):
        self.assertIsInstance(get_emitter("pdf"), PdfEmitter)
        self.assertIsInstance(get_emitter("docx"), DocxEmitter)
        self.assertIsInstance(get_emitter("html"), HtmlEmitter)
        self.assertIsInstance(get_emitter("clipboard"), TextEmitter)

    def test_fresh_instance_each_call(self):
        self.assertIsNot(get_emitter("pdf"), get_emitter("pdf"))

    def test_unknown_format(self):
        with self.assertRaises(KeyError):
            get_emitter("xls")


if __name__ == "__main__":
    unittest.main()
