"""ResuMate - tailored application packages from a resume and a job description."""

__version__ = "0.1.0"
