# tests package
