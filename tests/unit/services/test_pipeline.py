"""
Tests du pipeline de traitement d'un lot.

Le pipeline est assemble avec le vrai systeme de fichiers, un outil media
factice (vraies images JPEG) et un transport factice.

Ces tests verifient:
- L'envoi simple et le renommage dans le repertoire final
- Le flux video complet (planche, decoupage, album, fichiers conserves)
- Le confinement des erreurs au fichier en cours
- La suppression des repertoires de travail
- L'annulation du lot
"""

from pathlib import Path

import pytest

from src.adapters.file_system import FileSystemAdapter
from src.core.entities import SourceFile
from src.services.album import AlbumBuilder
from src.services.catalog import FileCatalog
from src.services.context import PipelineContext
from src.services.pipeline import BatchPipeline, BatchSummary, FileOutcome, scratch_directory
from src.services.probe import MediaProbeService
from src.services.relocator import FileRelocator
from src.services.segmenter import Segmenter
from src.services.thumbnail import ThumbnailComposer
from src.services.uploader import UploadOrchestrator
from tests.fixtures.fakes import FakeMediaToolkit, FakeTransport

DESTINATION = -100123


@pytest.fixture
def dirs(tmp_path: Path) -> dict[str, Path]:
    paths = {name: tmp_path / name for name in ("inbox", "done", "tmp")}
    paths["inbox"].mkdir()
    return paths


def _build(
    dirs: dict[str, Path],
    toolkit: FakeMediaToolkit,
    transport: FakeTransport,
    context: PipelineContext,
    max_size: int = 0,
    on_file_done=None,
    keep_temp: bool = False,
) -> BatchPipeline:
    file_system = FileSystemAdapter()
    return BatchPipeline(
        catalog=FileCatalog(file_system, dirs["inbox"]),
        probe_service=MediaProbeService(toolkit),
        segmenter=Segmenter(toolkit, max_size),
        thumbnail_composer=ThumbnailComposer(toolkit),
        album_builder=AlbumBuilder(),
        uploader=UploadOrchestrator(transport, context),
        relocator=FileRelocator(file_system, dirs["done"]),
        context=context,
        destination=DESTINATION,
        temp_dir=dirs["tmp"],
        keep_temp=keep_temp,
        on_file_done=on_file_done,
    )


def _write(directory: Path, name: str, size: int = 100) -> Path:
    path = directory / name
    path.write_bytes(b"x" * size)
    return path


def _names(directory: Path) -> list[str]:
    if not directory.exists():
        return []
    return sorted(p.name for p in directory.iterdir())


class TestSingleFiles:
    """Photos, audio et documents : envoi simple."""

    @pytest.mark.asyncio
    async def test_photo_delivered_and_renamed(
        self,
        dirs: dict[str, Path],
        fake_toolkit: FakeMediaToolkit,
        fake_transport: FakeTransport,
        pipeline_context: PipelineContext,
    ) -> None:
        _write(dirs["inbox"], "travel_sunset_beach.jpg")
        pipeline = _build(dirs, fake_toolkit, fake_transport, pipeline_context)

        summary = await pipeline.run()

        assert (summary.processed, summary.succeeded, summary.failed) == (1, 1, 0)
        assert _names(dirs["inbox"]) == []
        assert _names(dirs["done"]) == ["travel_sunset_beach_msgid_12345.jpg"]
        _, _, caption = fake_transport.singles[0]
        assert caption == "#travel sunset beach"
        assert fake_toolkit.calls == []

    @pytest.mark.asyncio
    async def test_failures_are_contained(
        self,
        dirs: dict[str, Path],
        fake_toolkit: FakeMediaToolkit,
        fake_transport: FakeTransport,
        pipeline_context: PipelineContext,
    ) -> None:
        """Un nom invalide et un envoi refuse n'arretent pas le lot."""
        _write(dirs["inbox"], "badname.jpg")
        _write(dirs["inbox"], "music_song.mp3")
        _write(dirs["inbox"], "notes_todo.pdf")
        fake_transport.fail_names = {"music_song.mp3"}
        pipeline = _build(dirs, fake_toolkit, fake_transport, pipeline_context)

        summary = await pipeline.run()

        assert (summary.processed, summary.succeeded, summary.failed) == (3, 1, 2)
        assert set(summary.failures) == {"badname.jpg", "music_song.mp3"}
        # Les fichiers en echec restent dans le repertoire source
        assert _names(dirs["inbox"]) == ["badname.jpg", "music_song.mp3"]
        assert _names(dirs["done"]) == ["notes_todo_msgid_12345.pdf"]

    @pytest.mark.asyncio
    async def test_on_file_done_called_per_file(
        self,
        dirs: dict[str, Path],
        fake_toolkit: FakeMediaToolkit,
        fake_transport: FakeTransport,
        pipeline_context: PipelineContext,
    ) -> None:
        _write(dirs["inbox"], "a_one.jpg")
        _write(dirs["inbox"], "b_two.jpg")
        seen: list[FileOutcome] = []
        pipeline = _build(
            dirs, fake_toolkit, fake_transport, pipeline_context, on_file_done=seen.append
        )

        await pipeline.run()

        assert [o.source.filename for o in seen] == ["a_one.jpg", "b_two.jpg"]
        assert all(o.success for o in seen)


class TestVideoFlow:
    """Videos : planche contact, decoupage, album."""

    @pytest.mark.asyncio
    async def test_small_video_album(
        self,
        dirs: dict[str, Path],
        fake_toolkit: FakeMediaToolkit,
        fake_transport: FakeTransport,
        pipeline_context: PipelineContext,
    ) -> None:
        """Sans decoupage : album planche + video originale."""
        _write(dirs["inbox"], "cats_nap.mp4")
        pipeline = _build(dirs, fake_toolkit, fake_transport, pipeline_context)

        summary = await pipeline.run()

        assert summary.succeeded == 1
        _, entries = fake_transport.albums[0]
        assert [e.handle.name for e in entries] == ["cats_nap_preview.jpg", "cats_nap.mp4"]
        assert entries[0].caption == "#cats nap"
        assert entries[1].caption == ""
        assert _names(dirs["done"]) == [
            "cats_nap_msgid_12345.mp4",
            "cats_nap_preview_msgid_12345.jpg",
        ]
        assert fake_toolkit.called("segment") == []
        assert _names(dirs["tmp"]) == []

    @pytest.mark.asyncio
    async def test_split_video_album(
        self,
        dirs: dict[str, Path],
        fake_transport: FakeTransport,
        pipeline_context: PipelineContext,
    ) -> None:
        """Video decoupee : planche + 3 segments, tous conserves dans le repertoire final."""
        toolkit = FakeMediaToolkit(segment_count=3)
        _write(dirs["inbox"], "trip_long.mkv", size=1000)
        pipeline = _build(dirs, toolkit, fake_transport, pipeline_context, max_size=400)

        summary = await pipeline.run()

        assert summary.succeeded == 1
        _, entries = fake_transport.albums[0]
        assert [e.handle.name for e in entries] == [
            "trip_long_preview.jpg",
            "trip_long_part000.mp4",
            "trip_long_part001.mp4",
            "trip_long_part002.mp4",
        ]
        assert all((e.width, e.height) == (1920, 1080) for e in entries[1:])
        assert _names(dirs["done"]) == [
            "trip_long_msgid_12345.mkv",
            "trip_long_part000_msgid_12345.mp4",
            "trip_long_part001_msgid_12345.mp4",
            "trip_long_part002_msgid_12345.mp4",
            "trip_long_preview_msgid_12345.jpg",
        ]
        assert _names(dirs["tmp"]) == []

    @pytest.mark.asyncio
    async def test_album_too_large_sends_nothing(
        self,
        dirs: dict[str, Path],
        fake_transport: FakeTransport,
        pipeline_context: PipelineContext,
    ) -> None:
        """13 segments : refus avant tout appel reseau, source intacte."""
        toolkit = FakeMediaToolkit(segment_count=13)
        _write(dirs["inbox"], "trip_huge.mkv", size=1000)
        pipeline = _build(dirs, toolkit, fake_transport, pipeline_context, max_size=50)

        summary = await pipeline.run()

        assert summary.failed == 1
        assert "14" in summary.failures["trip_huge.mkv"]
        assert fake_transport.network_calls == 0
        assert _names(dirs["inbox"]) == ["trip_huge.mkv"]
        assert _names(dirs["done"]) == []
        assert _names(dirs["tmp"]) == []

    @pytest.mark.asyncio
    async def test_upload_failure_keeps_source(
        self,
        dirs: dict[str, Path],
        fake_toolkit: FakeMediaToolkit,
        fake_transport: FakeTransport,
        pipeline_context: PipelineContext,
    ) -> None:
        _write(dirs["inbox"], "cats_nap.mp4")
        fake_transport.fail_names = {"cats_nap_preview.jpg"}
        pipeline = _build(dirs, fake_toolkit, fake_transport, pipeline_context)

        summary = await pipeline.run()

        assert summary.failed == 1
        assert fake_transport.albums == []
        assert _names(dirs["inbox"]) == ["cats_nap.mp4"]
        assert _names(dirs["tmp"]) == []
        assert len(pipeline_context.progress) == 0

    @pytest.mark.asyncio
    async def test_probe_failure(
        self,
        dirs: dict[str, Path],
        fake_toolkit: FakeMediaToolkit,
        fake_transport: FakeTransport,
        pipeline_context: PipelineContext,
    ) -> None:
        fake_toolkit.fail_probe = True
        _write(dirs["inbox"], "cats_nap.mp4")
        pipeline = _build(dirs, fake_toolkit, fake_transport, pipeline_context)

        summary = await pipeline.run()

        assert summary.failed == 1
        assert fake_transport.network_calls == 0

    @pytest.mark.asyncio
    async def test_scratch_creation_error_is_contained(
        self,
        dirs: dict[str, Path],
        fake_toolkit: FakeMediaToolkit,
        fake_transport: FakeTransport,
        pipeline_context: PipelineContext,
    ) -> None:
        """Un repertoire de travail impossible a creer n'arrete pas le lot."""
        dirs["tmp"].write_bytes(b"pas un repertoire")
        _write(dirs["inbox"], "a_clip.mp4")
        _write(dirs["inbox"], "b_photo.jpg")
        pipeline = _build(dirs, fake_toolkit, fake_transport, pipeline_context)

        summary = await pipeline.run()

        assert (summary.processed, summary.succeeded, summary.failed) == (2, 1, 1)
        assert set(summary.failures) == {"a_clip.mp4"}
        assert len(fake_transport.singles) == 1
        assert _names(dirs["inbox"]) == ["a_clip.mp4"]
        assert _names(dirs["done"]) == ["b_photo_msgid_12345.jpg"]

    @pytest.mark.asyncio
    async def test_keep_temp(
        self,
        dirs: dict[str, Path],
        fake_toolkit: FakeMediaToolkit,
        fake_transport: FakeTransport,
        pipeline_context: PipelineContext,
    ) -> None:
        """Avec keep_temp, le repertoire de travail reste pour inspection."""
        _write(dirs["inbox"], "cats_nap.mp4")
        pipeline = _build(
            dirs, fake_toolkit, fake_transport, pipeline_context, keep_temp=True
        )

        await pipeline.run()

        [workdir] = list(dirs["tmp"].iterdir())
        assert workdir.name.startswith("telestock_")


class TestCancellation:
    """Annulation du lot."""

    @pytest.mark.asyncio
    async def test_cancel_before_run(
        self,
        dirs: dict[str, Path],
        fake_toolkit: FakeMediaToolkit,
        fake_transport: FakeTransport,
        pipeline_context: PipelineContext,
    ) -> None:
        _write(dirs["inbox"], "a_one.jpg")
        pipeline_context.cancel()
        pipeline = _build(dirs, fake_toolkit, fake_transport, pipeline_context)

        summary = await pipeline.run()

        assert summary.cancelled
        assert summary.processed == 0
        assert fake_transport.network_calls == 0
        assert _names(dirs["inbox"]) == ["a_one.jpg"]

    @pytest.mark.asyncio
    async def test_cancel_between_files(
        self,
        dirs: dict[str, Path],
        fake_toolkit: FakeMediaToolkit,
        fake_transport: FakeTransport,
        pipeline_context: PipelineContext,
    ) -> None:
        """Annulation apres le premier fichier : le second n'est pas traite."""
        _write(dirs["inbox"], "a_one.jpg")
        _write(dirs["inbox"], "b_two.jpg")
        pipeline = _build(
            dirs,
            fake_toolkit,
            fake_transport,
            pipeline_context,
            on_file_done=lambda outcome: pipeline_context.cancel(),
        )

        summary = await pipeline.run()

        assert summary.cancelled
        assert summary.processed == 1
        assert _names(dirs["inbox"]) == ["b_two.jpg"]

    @pytest.mark.asyncio
    async def test_cancel_during_video_does_not_move(
        self,
        dirs: dict[str, Path],
        fake_toolkit: FakeMediaToolkit,
        pipeline_context: PipelineContext,
    ) -> None:
        """Annulation pendant l'envoi : aucun deplacement, travail nettoye."""

        class _CancellingTransport(FakeTransport):
            async def send_album(self, destination, entries):
                pipeline_context.cancel()
                return await super().send_album(destination, entries)

        _write(dirs["inbox"], "cats_nap.mp4")
        pipeline = _build(dirs, fake_toolkit, _CancellingTransport(), pipeline_context)

        summary = await pipeline.run()

        assert summary.cancelled
        assert summary.processed == 0
        assert _names(dirs["inbox"]) == ["cats_nap.mp4"]
        assert _names(dirs["done"]) == []
        assert _names(dirs["tmp"]) == []


class TestBatchSummary:
    """Tests pour BatchSummary."""

    def test_counts(self) -> None:
        ok = FileOutcome(source=SourceFile(Path("a_b.jpg"), 1), delivery_id=3)
        ko = FileOutcome(source=SourceFile(Path("c_d.jpg"), 1), error="refuse")
        summary = BatchSummary(outcomes=[ok, ko])
        assert (summary.processed, summary.succeeded, summary.failed) == (2, 1, 1)
        assert summary.failures == {"c_d.jpg": "refuse"}


def test_scratch_directory_removed_on_error(tmp_path: Path) -> None:
    """Le repertoire de travail est supprime meme en cas d'erreur."""
    with pytest.raises(RuntimeError):
        with scratch_directory(tmp_path) as workdir:
            (workdir / "partial.ts").write_bytes(b"x")
            raise RuntimeError("boom")
    assert list(tmp_path.iterdir()) == []
