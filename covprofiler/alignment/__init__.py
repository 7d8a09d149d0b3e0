# This file is part of CovProfiler.
# Original coverage-profiler code by Mike Covington
#
# Licensed under MIT License.


def get_depth_reader(depth_reader_name):
    """Get depth reader class matching provided name

    Args:
        depth_reader_name (str): Name of depth reader.

    Returns:
        Depth reader class providing ``depth_lines`` and ``seq_lengths``
    """
    if depth_reader_name == 'pysam':
        from .depth import PysamDepthReader

        return PysamDepthReader
    elif depth_reader_name == 'samtools':
        from .depth import SamtoolsDepthReader

        return SamtoolsDepthReader
    else:
        raise NotImplementedError(
            f'Unknown depth reader "{depth_reader_name}". Use "pysam" or "samtools".'
        )
