"""
rustlink - build a custom Rust toolchain from source and link it into rustup.
"""
