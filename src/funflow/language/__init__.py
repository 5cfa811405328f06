"""Language front ends analysed by funflow."""
