"""Benchmark rendering and serialization.

Run with:
    pytest benchmarks/benchmark_render.py -v --benchmark-only
"""

try:
    import pytest

    from kureha import RenderOptions, RubyRenderer, render
    from kureha.serialization import from_json, to_json

    @pytest.mark.benchmark(group="render-large")
    def test_benchmark_render_large_program(benchmark, large_program):
        """Render one large program."""
        benchmark(render, large_program)

    @pytest.mark.benchmark(group="render-large")
    def test_benchmark_render_large_program_newlines(benchmark, large_program):
        """Render with newline separators and the optional spaces kept."""
        renderer = RubyRenderer(
            RenderOptions(insert_separators=False, space_after_keywords=True)
        )
        benchmark(renderer.render, large_program)

    @pytest.mark.benchmark(group="render-many")
    def test_benchmark_render_many_programs(benchmark, small_programs):
        """Render many small programs with a shared renderer."""
        renderer = RubyRenderer()

        def render_all():
            for program in small_programs:
                renderer.render(program)

        benchmark(render_all)

    @pytest.mark.benchmark(group="serialization")
    def test_benchmark_json_round_trip(benchmark, large_program):
        """Deserialize a tree as handed over by an out-of-process parser."""
        data = to_json(large_program)
        benchmark(from_json, data)

except ImportError:
    pass  # pytest not available
