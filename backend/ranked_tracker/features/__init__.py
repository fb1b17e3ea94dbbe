"""Feature packages of the ranked tracker."""
