"""Access to the organization template repository and the issue tracker."""
