from setuptools import setup

setup(
    name="fake_quant_ext",
    version="0.0.1",
    description="Per-tensor affine fake quantization ops for PyTorch and NumPy arrays",
    packages=["fake_quant_ext"],
    python_requires=">=3.8",
    install_requires=[
        "torch",
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
