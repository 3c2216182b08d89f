"""SSDI work incentive tracker."""
